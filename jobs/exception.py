"""
Jobs 관련 예외 클래스 정의
"""


class JobsError(Exception):
    """Jobs 기본 예외"""
    pass


class JobNotFoundError(JobsError):
    """잡을 찾을 수 없음"""
    def __init__(self, slug: str):
        self.slug = slug
        self.message = f"Job not found: {slug}"
        super().__init__(self.message)
