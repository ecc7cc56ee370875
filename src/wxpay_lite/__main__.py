"""
wxpay-lite - command line smoke test
Creates a NATIVE order and prints its QR code URL, or queries an order.

    python -m wxpay_lite --mchid 1230000109 --key SECRET --appid wx123 --fee 1
    python -m wxpay_lite --mchid 1230000109 --key SECRET --appid wx123 --no ABC --query
"""
import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import List, Optional

from wxpay_lite.core.authorization import random_nonce
from wxpay_lite.credentials import LegacySigning
from wxpay_lite.exceptions import WxPayError
from wxpay_lite.logging import configure_logging
from wxpay_lite.models import CreateOrderRequest, QueryOrderRequest
from wxpay_lite.services import WxPayClient

TRADE_NO_LENGTH = 20


def random_trade_no(length: int = TRADE_NO_LENGTH) -> str:
    return random_nonce(length)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wxpay_lite",
        description="Create or query a WeChat Pay NATIVE order",
    )
    parser.add_argument("--mchid", default="", help="merchant's id")
    parser.add_argument("--key", default="", help="merchant's key")
    parser.add_argument("--appid", default="", help="app id")
    parser.add_argument("--body", default="TEST", help="payment body")
    parser.add_argument("--fee", type=int, default=1, help="payment total fee in fen")
    parser.add_argument("--no", dest="out_trade_no", default="",
                        help="out trade no, random string if empty")
    parser.add_argument("--url", default="http://localhost/", help="notify url")
    parser.add_argument("--query", action="store_true",
                        help="query (instead of create) order")
    parser.add_argument("--log-level", default="WARNING", help="log level")
    return parser


async def run(args: argparse.Namespace) -> int:
    """Execute one command. Returns the process exit code."""
    async with WxPayClient(args.mchid, LegacySigning(args.key)) as client:
        if args.query:
            order = await client.query_order(
                QueryOrderRequest(app_id=args.appid, out_trade_no=args.out_trade_no)
            )
            result = asdict(order)
            result.pop("raw")
            print(json.dumps(result, ensure_ascii=False, indent=2, default=str))
            return 0 if order.paid else 1

        created = await client.create_order(
            CreateOrderRequest(
                app_id=args.appid,
                body=args.body,
                out_trade_no=args.out_trade_no,
                total_fee=args.fee,
                spbill_create_ip="127.0.0.1",
                notify_url=args.url,
                trade_type="NATIVE",
                product_id=args.out_trade_no,
            )
        )
        print(created.code_url)
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, log_format="console")

    if not args.out_trade_no:
        args.out_trade_no = random_trade_no()
    print(f"OutTradeNo: {args.out_trade_no}", file=sys.stderr)

    try:
        return asyncio.run(run(args))
    except (WxPayError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
