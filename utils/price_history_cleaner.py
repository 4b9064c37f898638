"""
가격 이력 정리 모듈

차트 정규화 전에 기간 고가/저가를 벗어난 값을 보정한다.
"""

import logging

from utils.chart_errors import InvalidInputError

logger = logging.getLogger(__name__)


class PriceHistoryCleaner:
    """가격 이력 보정기 - 모든 메서드는 순수 함수(stateless)"""

    @staticmethod
    def clamp_to_period(
        prices: list[float], period_high: float, period_low: float
    ) -> list[float]:
        """
        기간 고가/저가를 벗어난 값을 고가·저가의 중간값으로 대체

        시세 API가 가끔 범위를 벗어난 값을 내려주는 경우를 보정한다.
        순서와 길이는 그대로 유지된다.

        Args:
            prices: 시간순 가격 리스트
            period_high: 기간 고가
            period_low: 기간 저가

        Returns:
            보정된 가격 리스트

        Raises:
            InvalidInputError: period_high < period_low
        """
        if period_high < period_low:
            raise InvalidInputError(
                f"기간 고가({period_high})가 저가({period_low})보다 낮습니다."
            )

        midpoint = (period_high + period_low) / 2
        cleaned = [
            midpoint if (p > period_high or p < period_low) else p
            for p in prices
        ]

        replaced = sum(1 for p in prices if p > period_high or p < period_low)
        if replaced:
            logger.info(f"범위를 벗어난 가격 {replaced}개를 중간값 {midpoint}로 보정했습니다.")

        return cleaned
