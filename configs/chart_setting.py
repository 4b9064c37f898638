import os
from pathlib import Path
from dotenv import load_dotenv
import logging
from utils.series_normalizer import DEFAULT_IDEAL_RANGE

logger = logging.getLogger(__name__)

DEFAULT_LABEL_DECIMALS = 2


class ChartSettings:
    """브라유 차트 렌더링 설정을 관리하는 싱글톤 클래스"""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """환경변수에서 차트 설정 로드"""
        # 프로젝트 루트 디렉토리 찾기
        project_root = Path(__file__).parent.parent
        env_path = project_root / '.env'

        # .env 파일이 있으면 로드, 없으면 기본값 사용
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)
            logger.debug(f".env 파일 로드: {env_path}")

        ideal_range_value = self._get_env_value('CHART_IDEAL_RANGE')
        decimals_value = self._get_env_value('CHART_LABEL_DECIMALS')

        self.ideal_range = self._parse_ideal_range(ideal_range_value)
        self.label_decimals = self._parse_label_decimals(decimals_value)

        # 설정값 검증
        self._validate_settings()

    def _get_env_value(self, key: str) -> str:
        """환경변수 값을 가져오고 정리"""
        value = os.getenv(key, '').strip()
        if value and value[0] in ['"', "'"] and value[-1] in ['"', "'"]:
            value = value[1:-1]
        return value

    def _parse_ideal_range(self, value: str) -> float:
        if not value:
            return float(DEFAULT_IDEAL_RANGE)
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"CHART_IDEAL_RANGE는 숫자여야 합니다: {value}") from None

    def _parse_label_decimals(self, value: str) -> int:
        if not value:
            return DEFAULT_LABEL_DECIMALS
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"CHART_LABEL_DECIMALS는 정수여야 합니다: {value}") from None

    def _validate_settings(self):
        """설정값 범위 검증"""
        # NaN은 어떤 비교도 통과하지 못하므로 부정 비교로 함께 걸러낸다
        if not (0 < self.ideal_range < float('inf')):
            raise ValueError(f"CHART_IDEAL_RANGE는 양수여야 합니다: {self.ideal_range}")
        if self.label_decimals < 0:
            raise ValueError(f"CHART_LABEL_DECIMALS는 0 이상이어야 합니다: {self.label_decimals}")

    def get_settings(self) -> dict:
        """차트 설정 반환"""
        return {
            'ideal_range': self.ideal_range,
            'label_decimals': self.label_decimals
        }


def get_ideal_range() -> float:
    """정규화 목표 범위(서브 도트 단위) 반환"""
    return ChartSettings().ideal_range


def get_label_decimals() -> int:
    """축 레이블 소수점 자리 수 반환"""
    return ChartSettings().label_decimals
