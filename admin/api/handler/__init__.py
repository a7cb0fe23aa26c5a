"""Admin API 핸들러 패키지"""

from admin.api.handler.job import JobHandler

__all__ = ['JobHandler']
