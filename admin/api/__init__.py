"""Admin API 패키지"""
