"""
Scheduler 관련 예외 클래스 정의
"""


class SchedulerError(Exception):
    """Scheduler 기본 예외"""
    pass


class CronParseError(SchedulerError):
    """크론 표현식 파싱 실패"""
    def __init__(self, cron_expression: str, message: str = None):
        self.cron_expression = cron_expression
        self.message = message or f"Invalid cron expression: {cron_expression}"
        super().__init__(self.message)


class InvalidTimezoneError(SchedulerError):
    """알 수 없는 타임존"""
    def __init__(self, timezone_name: str):
        self.timezone_name = timezone_name
        self.message = f"Unknown timezone: {timezone_name}"
        super().__init__(self.message)
