# Copyright (c) 2025 Ming Yu (yuming@oppo.com)
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import argparse
import json
import logging
import os
import sys
import time

from two_timer import Config, Instant, Period, TimeError, TimeParser
from two_timer.core.errors import ERROR_KINDS
from two_timer.core.logger import LOG_LEVELS, disable_module_logging, set_module_log_level, setup_logging

# 获取日志实例
logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger()


def span_to_list(span):
    return [span.start.isoformat(), span.end.isoformat(), span.is_range]


def normalize_expected(expected):
    """Re-render expected instants so that equivalent ISO spellings compare equal"""
    start, end, is_range = expected
    return [Instant.fromisoformat(start).isoformat(), Instant.fromisoformat(end).isoformat(), is_range]


def compare_results(calculated, ground_truth):
    """比较计算结果和ground truth"""
    if len(calculated) != len(ground_truth):
        return False

    if calculated != ground_truth:
        return False

    return True


def benchmark(parser, input_file, config, show_all_cases=True, writer=print):  # noqa: C901
    """
    Resolve every case of a JSONL regression file

    Each line holds "tree" (a serialized tagged parse), optional "now" and
    "config" overrides, and either "expected" ([start, end, is_range]) or
    "expected_error" (an error kind such as "Misordered").

    Args:
        parser (TimeParser): resolver
        input_file (str): JSONL path
        config (Config): base configuration the cases override
        show_all_cases (bool): also report successful cases
        writer (callable): receives each report line

    Returns:
        tuple: (total_cases, success_cases, error_cases)

    Raises:
        ValueError: if a line names an expected_error that is not a TimeError kind
    """
    total_cases = 0
    success_cases = 0
    error_cases = 0

    with open(input_file, encoding="utf-8") as fin:
        for line_num, line in enumerate(fin, 1):
            if not line.strip():
                continue
            total_cases += 1
            data = json.loads(line)
            tree = data["tree"]
            overrides = dict(data.get("config", {}))
            if "now" in data:
                overrides["now"] = data["now"]
            case_config = config.replace(**overrides)

            if "expected_error" in data:
                gt = data["expected_error"]
                if gt not in ERROR_KINDS:
                    raise ValueError(
                        f"{input_file}:{line_num}: unknown expected_error {gt!r}, expected one of {', '.join(ERROR_KINDS)}"
                    )
            else:
                gt = normalize_expected(data["expected"])

            _wall_start = time.time()
            try:
                calculated = span_to_list(parser.parse(tree, case_config))
            except TimeError as e:
                calculated = e.kind
                logger.debug(f"Line {line_num}: {e.kind}: {e.message}")
            _wall_cost = time.time() - _wall_start

            if isinstance(gt, list) and isinstance(calculated, list):
                match = compare_results(calculated, gt)
            else:
                match = calculated == gt

            if match:
                success_cases += 1
                if show_all_cases:
                    writer(f"Line {line_num}: ✓ Success | total={_wall_cost:.6f}s")
                    writer(f"  Tree: {tree}")
                    writer(f"  Result: {calculated}")
            else:
                error_cases += 1
                # 错误case总是显示
                writer(f"Line {line_num}: ✗ Mismatch | total={_wall_cost:.6f}s")
                writer(f"  Tree: {tree}")
                writer(f"  Now: {case_config.now}")
                writer(f"  Calculated: {calculated}")
                writer(f"  Ground Truth: {gt}")

    # 输出统计信息
    writer("\n" + "=" * 80)
    writer("BENCHMARK SUMMARY")
    writer("=" * 80)
    writer(f"Total test cases: {total_cases}")
    if total_cases:
        writer(f"Success cases: {success_cases} ({success_cases/total_cases*100:.2f}%)")
        writer(f"Error cases: {error_cases} ({error_cases/total_cases*100:.2f}%)")
    return total_cases, success_cases, error_cases


def build_config(args):
    """Base Config from the command-line flags"""
    values = {
        "monday_starts_week": not args.sunday_starts_week,
        "default_period": Period(args.period),
        "pay_period_length": args.pay_period_length,
        "pay_period_start": args.pay_period_start,
        "default_to_past": not args.default_to_future,
    }
    if args.now:
        values["now"] = args.now
    return Config.from_dict(values)


def main(argv=None):  # noqa: C901
    """Resolve one serialized tagged phrase, or benchmark a JSONL regression file."""
    # 控制--file模式时是否显示所有case信息（包括成功和失败）
    SHOW_ALL_CASES = False

    parser = argparse.ArgumentParser(
        description="two_timer - resolve tagged English time phrases to instant intervals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # resolve one serialized tree
  python main.py --tree 'particular { one_time { moment_or_period { period {
      specific_period { modified_period { modifier: "next" modifiable_period: "week" } } } } } }' \\
      --now 1969-05-06T12:00:00

  # benchmark a regression file
  python main.py --file cases.jsonl --output result.txt
        """,
    )
    parser.add_argument("--tree", help="Serialized tagged parse to resolve")
    parser.add_argument("--file", help="Path to a JSONL regression file")
    parser.add_argument("--output", help="Path to output file for saving --file results")
    parser.add_argument("--now", type=str, default=None, help="Reference time (ISO 8601), defaults to the wall clock")
    parser.add_argument("--sunday_starts_week", action="store_true", help="Weeks start on Sunday")
    parser.add_argument(
        "--period",
        type=str,
        choices=[period.value for period in Period],
        default=Period.MINUTE.value,
        help="Precision of 'now' and 'the beginning'",
    )
    parser.add_argument("--pay_period_length", type=int, default=7, help="Pay period length in days")
    parser.add_argument("--pay_period_start", type=str, default=None, help="Any day a pay period starts on")
    parser.add_argument(
        "--default_to_future",
        action="store_true",
        help="Resolve ambiguous phrases towards the future instead of the past",
    )
    parser.add_argument("--log_level", type=str.upper, choices=list(LOG_LEVELS), default=None, help="Package log level")
    parser.add_argument(
        "--debug_module",
        action="append",
        default=[],
        help="Log one module at DEBUG, e.g. english.parser.range_parser (repeatable)",
    )
    parser.add_argument(
        "--quiet_module", action="append", default=[], help="Silence one module, e.g. english.vocabulary (repeatable)"
    )
    args = parser.parse_args(argv)

    if not args.tree and not args.file:
        print("error: one of --tree or --file is required\n")
        parser.print_help()
        return 1

    if args.tree and args.file:
        print("error: --tree and --file cannot be used together\n")
        parser.print_help()
        return 1

    if args.output and not args.file:
        print("error: --output requires --file\n")
        parser.print_help()
        return 1

    if args.file and not os.path.exists(args.file):
        print(f"error: file not found: {args.file}\n")
        return 1

    if args.log_level:
        setup_logging(level=args.log_level)
    for module_name in args.debug_module:
        set_module_log_level(module_name, "DEBUG")
    for module_name in args.quiet_module:
        disable_module_logging(module_name)

    config = build_config(args)
    time_parser = TimeParser()

    start_time = time.time()
    if args.tree:
        print(f"Tree: {args.tree}")
        print(f"Now: {config.now}")
        try:
            span = time_parser.parse(args.tree, config)
        except TimeError as e:
            print(f"Error: {e.kind}: {e.message}")
            return 1
        print(f"Start: {span.start}")
        print(f"End: {span.end}")
        print(f"Range: {span.is_range}")
    elif args.output:
        # 同时输出到控制台和文件
        with open(args.output, "w", encoding="utf-8") as f:

            def writer(msg):
                try:
                    print(msg)
                except BrokenPipeError:
                    # 忽略管道中断错误（如使用 head 命令时）
                    pass
                f.write(msg + "\n")

            benchmark(time_parser, args.file, config, show_all_cases=SHOW_ALL_CASES, writer=writer)
    else:
        benchmark(time_parser, args.file, config, show_all_cases=SHOW_ALL_CASES)

    logger.info(f"Total time: {time.time() - start_time}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
