"""
차트 렌더링 예외 모듈

기존에 ValueError를 잡던 호출부가 그대로 동작하도록
모든 차트 예외는 ValueError를 상속한다.
"""


class ChartError(ValueError):
    """차트 코어에서 발생하는 예외의 기본 클래스"""


class InvalidInputError(ChartError):
    """구조적으로 처리할 수 없는 입력 (빈 시리즈, 잘못된 범위 등)"""
