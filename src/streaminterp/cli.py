import argparse
import signal
import sys
from typing import IO, List, Optional, TYPE_CHECKING

from . import __version__
from .actor import EngineActor
from .config import (
    DEFAULT_NEWTON_WINDOW,
    DEFAULT_PRECISION,
    DEFAULT_STEP,
    Config,
    Linear,
    Newton,
)
from .engine import InterpolationEngine
from .errors import EngineStopped, InterpolationError
from .logutil import get_logger, set_verbosity
from .metrics import engine_metrics
from .parsers import parse_point
from .sinks import JsonlSink, MultiSink, SampleSink, TextSink

if TYPE_CHECKING:  # pragma: no cover - typing only
    from rich.console import Console as _Console
else:  # runtime optional import
    try:  # noqa: SIM105
        from rich.console import Console as _Console  # type: ignore
    except ImportError:
        _Console = None  # type: ignore

ConsoleType = Optional["_Console"]


def positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {raw}")
    return value


def window_size(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}")
    if value < 2:
        raise argparse.ArgumentTypeError(f"window must be >= 2, got {value}")
    return value


def precision(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"precision must be >= 0, got {value}")
    return value


def build_configs(args: argparse.Namespace) -> List[Config]:
    """One Config per requested method, linear first."""
    configs: List[Config] = []
    if getattr(args, "linear", False):
        configs.append(Config(Linear(), step=args.step))
    if getattr(args, "newton", False):
        configs.append(Config(Newton(window_size=args.window), step=args.step))
    return configs


def _maybe_console(args: argparse.Namespace) -> ConsoleType:
    if getattr(args, "no_color", False):
        return None
    if _Console is None:
        return None
    # rich decides from the stream (and FORCE_COLOR / NO_COLOR) whether to emit ANSI codes
    return _Console(highlight=False, soft_wrap=True)


def build_sink(args: argparse.Namespace) -> SampleSink:
    sinks: List[SampleSink] = [TextSink(sys.stdout, precision=args.precision, console=_maybe_console(args))]
    if getattr(args, "jsonl", None):
        try:
            sinks.append(JsonlSink(args.jsonl))
        except OSError as exc:
            print(f"[streaminterp] could not open JSONL file {args.jsonl}: {exc}", file=sys.stderr)
    return sinks[0] if len(sinks) == 1 else MultiSink(sinks)


def _print_summary(engines: List[InterpolationEngine]) -> None:
    for engine in engines:
        m = engine_metrics(engine)
        print(
            f"[streaminterp] summary: method={m['method']} points={m['points']} "
            f"emitted={m['emitted']} cursor={m['cursor']}",
            file=sys.stderr,
            flush=True,
        )


def _open_input(path: str) -> IO[str]:
    if path == "-":
        return sys.stdin
    return open(path, "r", encoding="utf-8", errors="replace")


def cmd_run(args: argparse.Namespace) -> int:
    configs = build_configs(args)
    if not configs:
        print("[streaminterp] choose at least one method: --linear and/or --newton", file=sys.stderr)
        return 2
    set_verbosity(args.verbose)
    log = get_logger()
    try:
        handle = _open_input(args.file)
    except OSError as exc:
        print(f"[streaminterp] cannot read {args.file}: {exc}", file=sys.stderr)
        return 2

    sink = build_sink(args)
    engines = [InterpolationEngine(cfg, sink) for cfg in configs]
    actors = [EngineActor(engine) for engine in engines]
    log.info("started %s with step=%s", ", ".join(cfg.tag for cfg in configs), args.step)

    # SIGTERM takes the same path as Ctrl-C so the shutdown flush still runs
    def _sigterm_handler(signum, frame):  # pragma: no cover - exercised indirectly
        raise KeyboardInterrupt
    try:
        signal.signal(signal.SIGTERM, _sigterm_handler)
    except ValueError:  # pragma: no cover - not on the main thread
        pass

    exit_code = 0
    last_x: Optional[float] = None
    try:
        for lineno, line in enumerate(handle, start=1):
            try:
                point = parse_point(line)
            except ValueError as exc:
                print(f"[streaminterp] line {lineno}: skipped: {exc}", file=sys.stderr)
                continue
            if point is None:
                continue
            if last_x is not None and point.x <= last_x and not args.allow_unsorted:
                print(
                    f"[streaminterp] line {lineno}: skipped x={point.x}: x must increase (previous {last_x})",
                    file=sys.stderr,
                )
                continue
            last_x = point.x
            for actor in actors:
                actor.add_point(point.x, point.y)
    except KeyboardInterrupt:
        log.info("interrupted; flushing")
    finally:
        if handle is not sys.stdin:
            handle.close()
        for actor in actors:
            try:
                actor.shutdown()
            except EngineStopped:  # pragma: no cover - only if already shut down
                pass
        for actor in actors:
            try:
                actor.join()
            except (InterpolationError, OSError) as exc:
                print(f"[streaminterp] {actor.engine.config.tag} failed: {exc}", file=sys.stderr)
                exit_code = 1
        sink.close()
        if args.stats:
            _print_summary(engines)
    return exit_code


def cmd_serve(args: argparse.Namespace) -> int:  # pragma: no cover - integration feature
    try:
        import uvicorn
        from .service import build_app
    except (ImportError, RuntimeError):
        print("'serve' requires fastapi and uvicorn. Install with `pip install streaminterp[server]`.", file=sys.stderr)
        return 2
    if args.method == "newton":
        config = Config(Newton(window_size=args.window), step=args.step)
    else:
        config = Config(Linear(), step=args.step)
    uvicorn.run(build_app(config), host=args.host, port=args.port, log_level="info")
    return 0


def cmd_bench(args: argparse.Namespace) -> int:  # pragma: no cover - covered via integration test
    try:
        from bench.benchmark import run, synthetic_points
    except ImportError as exc:
        print(f"[streaminterp] bench harness import failed: {exc}", file=sys.stderr)
        return 2
    configs = build_configs(args) or [Config(Linear(), step=args.step), Config(Newton(args.window), step=args.step)]
    points = list(synthetic_points(args.points))
    for cfg in configs:
        run(points, cfg)
    return 0


def _add_method_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--linear", action="store_true", help="Emit linear interpolation samples")
    p.add_argument("--newton", action="store_true", help="Emit Newton divided-difference samples")
    p.add_argument(
        "-n",
        "--window",
        type=window_size,
        default=DEFAULT_NEWTON_WINDOW,
        help=f"Points in the Newton window (default: {DEFAULT_NEWTON_WINDOW})",
    )
    p.add_argument(
        "--step",
        type=positive_float,
        default=DEFAULT_STEP,
        help=f"Distance between emitted x values (default: {DEFAULT_STEP})",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streaminterp",
        description="Interpolate a stream of (x, y) points at a fixed x step.",
    )
    # Global --version (argparse will exit 0 before validating subcommands)
    parser.add_argument(
        "--version",
        action="version",
        version=f"streaminterp {__version__}",
        help="Show version and exit",
    )
    sub = parser.add_subparsers(dest="cmd")

    run_parser = sub.add_parser("run", help="Read points from a file or stdin and print interpolated samples")
    run_parser.add_argument("file", nargs="?", default="-", help="Input file, one point per line (default: stdin)")
    _add_method_args(run_parser)
    run_parser.add_argument(
        "--precision",
        type=precision,
        default=DEFAULT_PRECISION,
        help=f"Decimal places for printed x and y (default: {DEFAULT_PRECISION})",
    )
    run_parser.add_argument("--jsonl", help="Also append every sample as a JSON line to this file")
    run_parser.add_argument("--no-color", action="store_true", help="Disable colorized output even if rich present")
    run_parser.add_argument(
        "--allow-unsorted",
        action="store_true",
        help="Pass points through even when x does not increase",
    )
    run_parser.add_argument("--stats", action="store_true", help="Print a per-method summary to stderr at exit")
    run_parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-v info, -vv debug)")
    run_parser.set_defaults(func=cmd_run)

    bench_parser = sub.add_parser("bench", help="Run a quick throughput benchmark on synthetic points")
    _add_method_args(bench_parser)
    bench_parser.add_argument("--points", type=int, default=2000, help="Synthetic points to stream")
    bench_parser.set_defaults(func=cmd_bench)

    serve_parser = sub.add_parser("serve", help="Run HTTP service (requires streaminterp[server])")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8080)
    serve_parser.add_argument("--method", choices=["linear", "newton"], default="linear")
    serve_parser.add_argument("-n", "--window", type=window_size, default=DEFAULT_NEWTON_WINDOW)
    serve_parser.add_argument("--step", type=positive_float, default=DEFAULT_STEP)
    serve_parser.set_defaults(func=cmd_serve)

    # Simple 'version' subcommand for shells/users preferring explicit command
    version_parser = sub.add_parser("version", help="Show version and exit")
    version_parser.set_defaults(func=lambda _: (print(f"streaminterp {__version__}"), 0)[1])

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    if not getattr(args, "cmd", None):  # No subcommand provided
        parser.print_help()
        return 0
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
