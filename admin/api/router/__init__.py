"""Admin API 라우터 패키지"""
