"""ChartTextFormatter / render_price_chart 단위 테스트"""

import os
from unittest.mock import patch

import pytest

from configs.chart_setting import ChartSettings
from utils.braille_chart_renderer import BLANK_BRAILLE, BrailleChartRenderer
from utils.chart_errors import InvalidInputError
from utils.chart_text_formatter import ChartTextFormatter, render_price_chart


@pytest.fixture
def formatter():
    return ChartTextFormatter()


@pytest.fixture(autouse=True)
def reset_singleton():
    """각 테스트 전후에 설정 싱글톤 인스턴스를 초기화"""
    ChartSettings._instance = None
    yield
    ChartSettings._instance = None


class TestToLines:
    """to_lines / to_text 메서드 테스트"""

    def test_single_point_chart(self, formatter):
        chart = BrailleChartRenderer.render([0], 42, 42, 42)
        assert formatter.to_text(chart) == '⡀ 42'

    def test_flat_chart(self, formatter):
        chart = BrailleChartRenderer.render([0, 0, 0], 5, 5, 5)
        assert formatter.to_lines(chart) == ['⣀⡀ 5']

    def test_labels_on_top_and_bottom_rows(self, formatter):
        chart = BrailleChartRenderer.render([0, 17, 33, 50], 1, 4, 4)
        lines = formatter.to_lines(chart)

        assert len(lines) == 13
        assert lines[0] == BLANK_BRAILLE + '⠐ 4'
        assert lines[12] == '⡀' + BLANK_BRAILLE + ' 1'
        # 레이블이 없는 행은 차트 폭 그대로
        for line in lines[1:12]:
            assert len(line) == 2

    def test_last_label_follows_bottom_label(self, formatter):
        chart = BrailleChartRenderer.render([0, 50, 1], 10, 20, 11)
        lines = formatter.to_lines(chart)
        assert lines[-1].endswith(' 10 11')

    def test_last_label_at_end_of_last_row(self, formatter):
        chart = BrailleChartRenderer.render([0, 50, 25], 10, 20, 15)
        lines = formatter.to_lines(chart)
        assert lines[0].endswith(' 20')
        assert lines[12].endswith(' 10 15')
        # 마지막 샘플이 있는 행은 차트 폭 그대로
        assert len(lines[6]) == 2

    def test_to_text_joins_lines(self, formatter):
        chart = BrailleChartRenderer.render([0, 4], 0, 4, 4)
        assert formatter.to_text(chart) == '⢀ 4\n⡀ 0'


class TestToHtml:
    """to_html 메서드 테스트"""

    def test_pre_block(self, formatter):
        chart = BrailleChartRenderer.render([0], 42, 42, 42)
        assert formatter.to_html(chart) == '<pre>⡀ 42</pre>'

    def test_title_is_bold_and_escaped(self, formatter):
        chart = BrailleChartRenderer.render([0], 42, 42, 42)
        result = formatter.to_html(chart, title='USD<KRW> & JPY')
        assert result.startswith('<b>USD&lt;KRW&gt; &amp; JPY</b>\n<pre>')
        assert result.endswith('</pre>')


class TestRenderPriceChart:
    """render_price_chart 파이프라인 테스트"""

    def test_four_point_example(self):
        chart = render_price_chart([1, 2, 3, 4], ideal_range=50)
        assert chart.rows == 13
        assert chart.columns == 2
        assert chart.top_label == '4'
        assert chart.bottom_label == '1'
        assert chart.last_label is None

    def test_single_sample(self):
        chart = render_price_chart([42])
        assert chart.grid == [['⡀']]
        assert chart.top_label == chart.bottom_label == '42'

    def test_flat_series(self):
        chart = render_price_chart([5, 5, 5])
        assert chart.rows == 1
        assert chart.grid == [['⣀', '⡀']]

    def test_decimal_last_label(self):
        chart = render_price_chart([1450.0, 1452.5, 1448.0, 1449.25], ideal_range=50)
        assert chart.top_label == '1452.50'
        assert chart.bottom_label == '1448'
        assert chart.last_label == '1449.25'

    def test_uses_configured_ideal_range(self):
        """ideal_range 미지정 시 CHART_IDEAL_RANGE 설정값 사용"""
        with patch.dict(os.environ, {'CHART_IDEAL_RANGE': '8', 'CHART_LABEL_DECIMALS': ''}):
            chart = render_price_chart([0.0, 1.0, 2.0])
        # [0, 4, 8] → 3행
        assert chart.rows == 3

    def test_uses_configured_label_decimals(self):
        with patch.dict(os.environ, {'CHART_IDEAL_RANGE': '', 'CHART_LABEL_DECIMALS': '1'}):
            chart = render_price_chart([1.25, 2.5, 1.75])
        assert chart.top_label == '2.5'
        assert chart.last_label == '1.8'

    def test_empty_prices_raise(self):
        with pytest.raises(InvalidInputError):
            render_price_chart([])
