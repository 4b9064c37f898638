"""브라유 차트 텍스트/HTML 출력 모듈"""

import html
import logging
from typing import Optional

from configs.chart_setting import get_ideal_range, get_label_decimals
from utils.braille_chart_renderer import BrailleChart, BrailleChartRenderer
from utils.series_normalizer import SeriesNormalizer

logger = logging.getLogger(__name__)


def render_price_chart(
    prices: list[float],
    ideal_range: Optional[float] = None,
    label_decimals: Optional[int] = None,
) -> BrailleChart:
    """
    가격 시리즈를 정규화한 뒤 브라유 차트로 렌더링

    Args:
        prices: 시간순 가격 리스트 (1개 이상)
        ideal_range: 정규화 목표 범위 (None이면 CHART_IDEAL_RANGE 설정값)
        label_decimals: 레이블 소수점 자리 수 (None이면 CHART_LABEL_DECIMALS 설정값)

    Returns:
        BrailleChart
    """
    if ideal_range is None:
        ideal_range = get_ideal_range()
    if label_decimals is None:
        label_decimals = get_label_decimals()

    normalized = SeriesNormalizer.normalize(prices, ideal_range)
    return BrailleChartRenderer.render(
        normalized,
        original_min=min(prices),
        original_max=max(prices),
        original_last=prices[-1],
        label_decimals=label_decimals,
    )


class ChartTextFormatter:
    """BrailleChart를 표시 가능한 문자열로 변환"""

    def to_lines(self, chart: BrailleChart) -> list[str]:
        """
        격자의 각 행을 문자열로 만들고 레이블을 지정 위치에 붙인다.

        레이블이 없는 행은 차트 폭 그대로 둔다.
        """
        lines = [''.join(row) for row in chart.grid]

        for label in sorted(chart.labels, key=lambda item: (item.row, item.column)):
            line = lines[label.row]
            lines[label.row] = line.ljust(label.column) + label.text

        return lines

    def to_text(self, chart: BrailleChart) -> str:
        """터미널 출력용 여러 줄 문자열"""
        return '\n'.join(self.to_lines(chart))

    def to_html(self, chart: BrailleChart, title: Optional[str] = None) -> str:
        """
        텔레그램 HTML 파싱 모드용 <pre> 블록

        Args:
            chart: 렌더링된 차트
            title: 차트 위에 굵게 표시할 제목 (선택)
        """
        body = f'<pre>{html.escape(self.to_text(chart))}</pre>'
        if title:
            return f'<b>{html.escape(title)}</b>\n{body}'
        return body
