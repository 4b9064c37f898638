# utils/price_history_loader.py

from pathlib import Path
import logging
import pandas as pd
from utils.chart_errors import InvalidInputError


logger = logging.getLogger(__name__)


class PriceHistoryLoader:
    def __init__(self, csv_path, price_column='close', date_column=None):
        self.csv_path = Path(csv_path)
        self.price_column = price_column
        self.date_column = date_column  # 지정하면 이 컬럼 기준으로 오래된 순 정렬

    def read_frame(self):
        """CSV 파일을 DataFrame으로 읽기 (천 단위 구분자 허용)"""
        try:
            return pd.read_csv(self.csv_path, thousands=',')
        except FileNotFoundError:
            logger.error(f"가격 이력 파일을 찾을 수 없습니다: {self.csv_path}")
            raise
        except pd.errors.EmptyDataError:
            raise InvalidInputError(f"가격 이력 파일이 비어 있습니다: {self.csv_path}") from None

    def load(self) -> list[float]:
        """시간순 종가 리스트 반환"""
        df = self.read_frame()

        if self.price_column not in df.columns:
            raise InvalidInputError(
                f"'{self.price_column}' 컬럼이 없습니다. 사용 가능한 컬럼: {', '.join(map(str, df.columns))}"
            )

        if self.date_column:
            if self.date_column not in df.columns:
                raise InvalidInputError(f"'{self.date_column}' 날짜 컬럼이 없습니다.")
            df[self.date_column] = pd.to_datetime(df[self.date_column])
            df = df.sort_values(self.date_column, kind='stable')

        # 숫자로 바꿀 수 없는 값은 결측치로 보고 제외
        prices = pd.to_numeric(df[self.price_column], errors='coerce').dropna()
        dropped = len(df) - len(prices)
        if dropped:
            logger.warning(f"숫자가 아닌 가격 {dropped}개를 제외했습니다.")

        if prices.empty:
            raise InvalidInputError(f"유효한 가격 데이터가 없습니다: {self.csv_path}")

        logger.info(f"가격 이력 {len(prices)}개 로드 완료: {self.csv_path.name}")
        return [float(p) for p in prices]
