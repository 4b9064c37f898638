"""
가격 시리즈 정규화 모듈

원본 가격 시리즈를 브라유 렌더러의 서브 도트 좌표계(0 ~ ideal_range)로
선형 변환하는 순수 함수 모음.
"""

import logging
import math

from utils.chart_errors import InvalidInputError

logger = logging.getLogger(__name__)

# 200개 안팎의 가격 이력이 약 12~13행에 들어가도록 잡은 기본값
DEFAULT_IDEAL_RANGE = 50


class SeriesNormalizer:
    """가격 시리즈 정규화기 - 모든 메서드는 순수 함수(stateless)"""

    @staticmethod
    def normalize(series: list[float], ideal_range: float = DEFAULT_IDEAL_RANGE) -> list[int]:
        """
        가격 시리즈를 0 ~ ideal_range 범위의 정수 시리즈로 변환

        - 최솟값 → 0, 최댓값 → round(ideal_range)
        - 모든 값 동일(max == min): 같은 길이의 0 리스트 반환
        - 출력 길이는 항상 입력 길이와 같다

        Args:
            series: 시간순으로 정렬된 가격 리스트 (1개 이상)
            ideal_range: 전체 가격 범위가 차지할 서브 도트 단위 수 (양수)

        Returns:
            정규화된 0 이상의 정수 리스트

        Raises:
            InvalidInputError: 빈 시리즈, 양수가 아닌 ideal_range, NaN/무한대 값
        """
        if not series:
            raise InvalidInputError("정규화할 가격 시리즈가 비어 있습니다.")

        if not math.isfinite(ideal_range) or ideal_range <= 0:
            raise InvalidInputError(f"ideal_range는 양수여야 합니다: {ideal_range}")

        for value in series:
            try:
                finite = math.isfinite(value)
            except OverflowError:
                raise InvalidInputError("float 범위를 벗어난 가격이 포함되어 있습니다.") from None
            if not finite:
                raise InvalidInputError(f"유한하지 않은 가격이 포함되어 있습니다: {value}")

        min_val = min(series)
        max_val = max(series)

        if min_val == max_val:
            logger.debug(f"평탄한 시리즈 ({len(series)}개, 값={min_val}): 모두 0으로 정규화")
            return [0] * len(series)

        # 비율을 먼저 구해야 아주 작은 범위에서도 배율이 무한대로 넘치지 않는다
        span = max_val - min_val
        logger.debug(f"정규화: 범위 {min_val} ~ {max_val} → 0 ~ {ideal_range}")

        if not math.isfinite(span):
            # float 한계 근처의 극단적인 범위는 절반 크기로 계산
            half_min = min_val / 2
            half_span = max_val / 2 - half_min
            return [round((v / 2 - half_min) / half_span * ideal_range) for v in series]

        return [round((v - min_val) / span * ideal_range) for v in series]
