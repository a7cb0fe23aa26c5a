"""공통 유틸리티"""
