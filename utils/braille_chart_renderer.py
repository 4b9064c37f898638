"""
브라유 점자 라인 차트 렌더링 모듈

정규화된 가격 시리즈를 유니코드 브라유 문자(U+2800~U+28FF) 격자로 그린다.
한 문자는 2열 x 4행의 서브 도트를 가지며, 짝수 번째 샘플은 왼쪽 열,
홀수 번째 샘플은 오른쪽 열에 찍힌다.

같은 문자 칸에 연속으로 떨어진 두 샘플은 하나의 칸에 두 점을 함께 찍어
선이 끊기지 않도록 잇는다(dot-join).
"""

import logging
import math
from dataclasses import dataclass, field
from numbers import Integral

from utils.chart_errors import InvalidInputError

logger = logging.getLogger(__name__)

BRAILLE_BASE = 0x2800
BLANK_BRAILLE = chr(BRAILLE_BASE)

# 문자 한 칸이 담는 세로 서브 도트 수
DOTS_PER_CELL = 4

# 표준 점자 번호(1~8번 점 → bit 0~7) 기준, 서브 행 0(아래) → 3(위) 순서
#   1 4
#   2 5
#   3 6
#   7 8
LEFT_HALF_BITS = (0x40, 0x04, 0x02, 0x01)   # 7, 3, 2, 1번 점
RIGHT_HALF_BITS = (0x80, 0x20, 0x10, 0x08)  # 8, 6, 5, 4번 점
HALF_BITS = (LEFT_HALF_BITS, RIGHT_HALF_BITS)


def encode_cell(half: int, dot: int) -> int:
    """
    칸 안의 (열, 서브 행) 위치를 8비트 점자 마스크로 변환

    Args:
        half: 0 = 왼쪽 열, 1 = 오른쪽 열
        dot: 0(아래) ~ 3(위) 서브 행

    Returns:
        비트 하나만 켜진 마스크
    """
    return HALF_BITS[half][dot]


def mask_to_char(mask: int) -> str:
    """8비트 마스크를 브라유 문자로 변환"""
    return chr(BRAILLE_BASE + mask)


def format_price_label(value: float, decimals: int = 2) -> str:
    """
    축 레이블용 가격 문자열

    정수 값(42, 42.0)은 소수점 없이, 그 외에는 decimals 자리까지 표시한다.
    """
    if isinstance(value, Integral):
        return str(int(value))
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return f"{value:.{decimals}f}"


@dataclass
class ChartLabel:
    """격자 기준 좌표에 놓이는 레이블"""

    row: int
    column: int  # 격자 열 기준, 차트 오른쪽 바깥부터 시작
    text: str


@dataclass
class BrailleChart:
    """렌더링 결과 (격자 + 축 레이블)"""

    grid: list[list[str]]
    top_label: str
    bottom_label: str
    last_label: str | None = None  # 최근 값이 최고/최저와 다를 때만 존재
    labels: list[ChartLabel] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0]) if self.grid else 0


@dataclass
class JoinState:
    """직전에 칠한 샘플의 위치 (렌더링 1회 동안만 유지)"""

    row: int
    column: int
    half: int
    dot: int


class BrailleChartRenderer:
    """브라유 라인 차트 렌더러 - 입력만으로 결과가 정해지는 순수 함수"""

    # 차트와 레이블 사이 빈칸 수
    LABEL_GAP = 1

    @staticmethod
    def grid_size(normalized: list[int]) -> tuple[int, int]:
        """
        격자 크기 (행, 열) 계산

        행 = floor((max - min) / 4) + 1, 열 = ceil(샘플 수 / 2)
        """
        if not normalized:
            raise InvalidInputError("렌더링할 시리즈가 비어 있습니다.")

        rows = (max(normalized) - min(normalized)) // DOTS_PER_CELL + 1
        columns = (len(normalized) + 1) // 2
        return rows, columns

    @staticmethod
    def render(
        normalized: list[int],
        original_min: float,
        original_max: float,
        original_last: float,
        label_decimals: int = 2,
    ) -> BrailleChart:
        """
        정규화된 시리즈를 브라유 격자와 축 레이블로 렌더링

        - 가장 큰 값은 맨 위 행(0), 가장 작은 값은 맨 아래 행에 놓인다
        - 연속된 두 샘플이 같은 칸이면 두 점을 한 칸에 합친다
        - 그 외에는 해당 칸에 점 하나만 찍고 나머지 절반은 비워 둔다
        - 최근 값이 최고/최저와 다르면 맨 아래 행 끝에 추가 레이블

        Args:
            normalized: 0 이상의 정수 시리즈 (시간순, 1개 이상)
            original_min: 원본 시리즈 최솟값 (하단 레이블)
            original_max: 원본 시리즈 최댓값 (상단 레이블)
            original_last: 원본 시리즈의 마지막 값
            label_decimals: 정수가 아닌 레이블의 소수점 자리 수

        Returns:
            BrailleChart

        Raises:
            InvalidInputError: 빈 시리즈, 정수가 아니거나 음수인 값, min > max
        """
        if not normalized:
            raise InvalidInputError("렌더링할 시리즈가 비어 있습니다.")

        for value in normalized:
            if isinstance(value, bool) or not isinstance(value, Integral) or value < 0:
                raise InvalidInputError(f"정규화 값은 0 이상의 정수여야 합니다: {value!r}")

        if original_min > original_max:
            raise InvalidInputError(
                f"최솟값({original_min})이 최댓값({original_max})보다 큽니다."
            )

        rows, columns = BrailleChartRenderer.grid_size(normalized)
        low = min(normalized)

        # 점이 없는 칸도 빈 점자 문자로 채워 직사각형 격자를 유지
        grid = [[BLANK_BRAILLE] * columns for _ in range(rows)]

        state: JoinState | None = None
        for index, value in enumerate(normalized):
            offset = value - low
            row = rows - 1 - offset // DOTS_PER_CELL
            column = index // 2
            half = index % 2
            dot = offset % DOTS_PER_CELL

            mask = encode_cell(half, dot)
            if state is not None and state.row == row and state.column == column:
                # 직전 샘플과 같은 칸: 두 점을 한 칸에 연결
                mask |= encode_cell(state.half, state.dot)

            grid[row][column] = mask_to_char(mask)
            state = JoinState(row=row, column=column, half=half, dot=dot)

        top_label = format_price_label(original_max, label_decimals)
        bottom_label = format_price_label(original_min, label_decimals)
        last_label = None
        if original_last != original_max and original_last != original_min:
            last_label = format_price_label(original_last, label_decimals)

        labels = BrailleChartRenderer._place_labels(
            rows, columns, top_label, bottom_label, last_label,
            same_extremes=(original_max == original_min),
        )

        logger.debug(f"브라유 차트 렌더링 완료: {rows}행 x {columns}열, 샘플 {len(normalized)}개")

        return BrailleChart(
            grid=grid,
            top_label=top_label,
            bottom_label=bottom_label,
            last_label=last_label,
            labels=labels,
        )

    @staticmethod
    def _place_labels(
        rows: int,
        columns: int,
        top_label: str,
        bottom_label: str,
        last_label: str | None,
        same_extremes: bool = False,
    ) -> list[ChartLabel]:
        """
        레이블을 격자 오른쪽 바깥 좌표에 배치한다.

        상단 레이블은 맨 위 행, 하단 레이블과 최근 값 레이블은 맨 아래 행 끝에 놓는다.
        같은 행에 레이블이 여러 개면 앞 레이블 뒤에 LABEL_GAP만큼 띄워 이어 붙인다.
        한 행짜리 차트에서 최고/최저 값이 같으면 레이블을 하나만 둔다.
        """
        next_column: dict[int, int] = {}
        labels: list[ChartLabel] = []

        def place(row: int, text: str):
            column = next_column.get(row, columns + BrailleChartRenderer.LABEL_GAP)
            labels.append(ChartLabel(row=row, column=column, text=text))
            next_column[row] = column + len(text) + BrailleChartRenderer.LABEL_GAP

        place(0, top_label)
        if rows > 1 or not same_extremes:
            place(rows - 1, bottom_label)
        if last_label is not None:
            place(rows - 1, last_label)

        return labels
