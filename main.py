import argparse
import logging
import sys
from utils.chart_errors import ChartError
from utils.chart_text_formatter import ChartTextFormatter, render_price_chart
from utils.price_history_cleaner import PriceHistoryCleaner
from utils.price_history_loader import PriceHistoryLoader

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="가격 이력 CSV를 브라유 라인 차트로 출력합니다.")
    parser.add_argument('csv_path', help="가격 이력 CSV 파일 경로")
    parser.add_argument('--column', default='close', help="가격 컬럼 이름 (기본값: close)")
    parser.add_argument('--date-column', default=None, help="정렬 기준 날짜 컬럼 이름")
    parser.add_argument('--ideal-range', type=float, default=None,
                        help="정규화 목표 범위 (기본값: CHART_IDEAL_RANGE 설정)")
    parser.add_argument('--high', type=float, default=None, help="기간 고가 (--low와 함께 사용)")
    parser.add_argument('--low', type=float, default=None, help="기간 저가 (--high와 함께 사용)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        loader = PriceHistoryLoader(args.csv_path, price_column=args.column, date_column=args.date_column)
        prices = loader.load()

        # 기간 고가/저가가 주어진 경우에만 범위 밖 값 보정
        if args.high is not None and args.low is not None:
            prices = PriceHistoryCleaner.clamp_to_period(prices, args.high, args.low)
        elif args.high is not None or args.low is not None:
            logger.warning("--high와 --low는 함께 지정해야 합니다. 보정을 건너뜁니다.")

        chart = render_price_chart(prices, ideal_range=args.ideal_range)
        print(ChartTextFormatter().to_text(chart))
        return 0

    except (ChartError, FileNotFoundError) as e:
        logger.error(f"차트 생성 실패: {str(e)}")
        return 1
    except Exception as e:
        logger.error(f"차트 생성 중 오류 발생: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
