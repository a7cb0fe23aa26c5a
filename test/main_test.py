"""
설정 로드 및 프로세스 게이팅 테스트

테스트 항목:
1. app.yaml 로드 (기본 설정 파일 포함)
2. CRON_SERVER 환경 변수로 스케줄러 활성화
3. PORT 환경 변수로 Admin 포트 변경
4. 설정 파일이 없으면 기본값
5. .env 파일 로드 (실제 환경 변수가 우선)
6. 본문 없는 yaml 섹션 허용
7. 스케줄러 비활성 시 잡 등록 안 함, 활성 시 모든 잡 등록

실행: python -m pytest test/main_test.py -v
"""

import logging
import sys
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

# 프로젝트 루트 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from jobs import JOBS
from main import CONFIG_PATH, AppConfig, build_scheduler, load_config

# 테스트용 로깅 설정
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """작업 디렉토리의 .env가 테스트에 섞이지 않도록"""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config_file(tmp_path):
    """테스트용 app.yaml"""
    path = tmp_path / "app.yaml"
    path.write_text(
        yaml.safe_dump({
            "scheduler": {"enabled": False, "timezone": "UTC", "retry_delay_seconds": 5},
            "admin": {"host": "127.0.0.1", "port": 8080},
            "logging": {"level": "DEBUG", "json_format": True},
        }),
        encoding="utf-8",
    )
    return path


class TestLoadConfig:
    """load_config 테스트"""

    def test_default_config_file(self):
        """저장소의 config/app.yaml 로드"""
        config = load_config(CONFIG_PATH, env={})

        assert config.scheduler.enabled is False
        assert config.scheduler.retry_delay_seconds == 10
        assert config.scheduler.timezone is None
        assert config.scheduler.max_sleep_seconds == 60
        assert config.admin.port == 3000

    def test_yaml_values(self, config_file):
        """yaml 값 반영"""
        config = load_config(config_file, env={})

        assert config.scheduler.timezone == "UTC"
        assert config.scheduler.retry_delay_seconds == 5
        assert config.admin.host == "127.0.0.1"
        assert config.admin.port == 8080
        assert config.logging.level == "DEBUG"
        assert config.logging.json_format is True

    def test_cron_server_env_enables_scheduler(self, config_file):
        """CRON_SERVER 값이 있으면 스케줄러 활성화"""
        assert load_config(config_file, env={"CRON_SERVER": "true"}).scheduler.enabled is True
        assert load_config(config_file, env={"CRON_SERVER": ""}).scheduler.enabled is False

    def test_port_env_overrides(self, config_file):
        """PORT 환경 변수 우선"""
        assert load_config(config_file, env={"PORT": "4000"}).admin.port == 4000

    def test_invalid_port(self, config_file):
        """숫자가 아닌 PORT는 거부"""
        with pytest.raises(ValidationError):
            load_config(config_file, env={"PORT": "not-a-port"})

    def test_missing_file_uses_defaults(self, tmp_path):
        """설정 파일이 없으면 기본값"""
        config = load_config(tmp_path / "missing.yaml", env={})
        assert config == AppConfig()

    def test_empty_sections(self, tmp_path):
        """본문 없는 섹션(`scheduler:`)도 기본값으로 처리하고 환경 변수 적용"""
        path = tmp_path / "app.yaml"
        path.write_text("scheduler:\nadmin:\nlogging:\n", encoding="utf-8")

        config = load_config(path, env={"CRON_SERVER": "1", "PORT": "4000"})

        assert config.scheduler.enabled is True
        assert config.admin.port == 4000
        assert config.logging.level == "INFO"


class TestDotenv:
    """.env 파일 테스트"""

    def test_env_file_enables_scheduler(self, config_file, tmp_path):
        """.env의 CRON_SERVER=1로 스케줄러 활성화"""
        env_file = tmp_path / ".env"
        env_file.write_text("CRON_SERVER=1\nPORT=5000\n", encoding="utf-8")

        config = load_config(config_file, env={}, env_file=env_file)

        assert config.scheduler.enabled is True
        assert config.admin.port == 5000

    def test_default_env_file_in_working_directory(self, config_file, tmp_path):
        """기본값은 작업 디렉토리의 .env"""
        (tmp_path / ".env").write_text("CRON_SERVER=yes\n", encoding="utf-8")

        assert load_config(config_file, env={}).scheduler.enabled is True

    def test_process_env_wins_over_env_file(self, config_file, tmp_path):
        """실제 환경 변수가 .env보다 우선"""
        env_file = tmp_path / ".env"
        env_file.write_text("PORT=5000\n", encoding="utf-8")

        assert load_config(config_file, env={"PORT": "6000"}, env_file=env_file).admin.port == 6000

    def test_env_file_disabled(self, config_file, tmp_path):
        """env_file=None이면 .env를 읽지 않음"""
        (tmp_path / ".env").write_text("CRON_SERVER=1\n", encoding="utf-8")

        assert load_config(config_file, env={}, env_file=None).scheduler.enabled is False

    def test_missing_env_file(self, config_file, tmp_path):
        """.env 파일이 없으면 무시"""
        config = load_config(config_file, env={}, env_file=tmp_path / "missing.env")
        assert config.scheduler.enabled is False


class TestBuildScheduler:
    """build_scheduler 테스트"""

    def test_disabled(self):
        """비활성이면 None"""
        assert build_scheduler(AppConfig()) is None

    def test_enabled_registers_all_jobs(self):
        """활성이면 모든 잡 등록"""
        config = AppConfig(scheduler={"enabled": True})
        scheduler = build_scheduler(config)

        assert scheduler is not None
        assert [e.name for e in scheduler.entries] == [job.slug for job in JOBS]
        assert [e.expression for e in scheduler.entries] == [job.schedule for job in JOBS]
