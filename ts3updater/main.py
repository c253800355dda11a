from __future__ import annotations

import argparse
import logging
import signal
import sys
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, List, Optional

import requests

from . import __version__
from .config import UpdaterConfig, load_config
from .errors import UpdaterError
from .lib.net import build_session
from .lib.service import entry_install_dir
from .logging_utils import configure_logging
from .pipeline import Options, UpdateCtx, run_pipeline
from .steps import (
    AcceptLicenseStep,
    CheckDependenciesStep,
    CompareVersionsStep,
    DetectLocalVersionStep,
    DownloadStep,
    FetchMetadataStep,
    InstallStep,
    PrepareWorkdirStep,
    ResolvePlatformStep,
    StartServerStep,
    VerifyChecksumStep,
)

logger = logging.getLogger(__name__)

# Updater options that take a value; they are not forwarded to the server.
_VALUE_OPTIONS = ("--install-dir", "--config", "--log")
_OWN_FLAGS = ("--verbose",)


def build_steps():
    return [
        CheckDependenciesStep(),
        ResolvePlatformStep(),
        FetchMetadataStep(),
        DetectLocalVersionStep(),
        CompareVersionsStep(),
        PrepareWorkdirStep(),
        DownloadStep(),
        VerifyChecksumStep(),
        AcceptLicenseStep(),
        InstallStep(),
        StartServerStep(),
    ]


def passthrough_args(argv: List[str]) -> List[str]:
    """Arguments forwarded to the server start command."""

    out: List[str] = []
    skip_next = False
    for tok in argv:
        if skip_next:
            skip_next = False
            continue
        if tok in _VALUE_OPTIONS:
            skip_next = True
            continue
        if tok.split("=", 1)[0] in _VALUE_OPTIONS or tok in _OWN_FLAGS:
            continue
        out.append(tok)
    return out


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):
        # Usage errors share the failure exit code.
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="ts3updater",
        description="Install and update a TeamSpeak 3 server.",
        epilog="Unrecognized arguments are passed on to the server start script.",
        allow_abbrev=False,
    )
    p.add_argument("--dont-start", action="store_true", help="do not start server after update")
    p.add_argument("--check-only", action="store_true", help="do not update - only check for new version")
    p.add_argument("--accept-license", action="store_true", help="accept license")
    p.add_argument("--install-dir", default=None, help="Server installation directory (default: the one holding this updater, else current directory)")
    p.add_argument("--config", default=None, help="Path to updater config (yaml)")
    p.add_argument("--log", default=None, help="Also write the log to this file")
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def parse_options(argv: List[str]) -> tuple[Options, argparse.Namespace]:
    parser = build_parser()
    if any(tok in ("-h", "--help") for tok in argv):
        parser.print_help()
        raise SystemExit(0)

    args, unknown = parser.parse_known_args(argv)
    if unknown:
        logger.debug("Ignoring unrecognized arguments: %s", unknown)
    options = Options(
        dont_start=bool(args.dont_start),
        accept_license=bool(args.accept_license),
        check_only=bool(args.check_only),
        verbose=bool(args.verbose),
        passthrough=passthrough_args(argv),
    )
    return options, args


def _raise_exit(signum, frame):
    raise SystemExit(128 + signum)


@contextmanager
def exit_on_signals(signums=(signal.SIGTERM, signal.SIGHUP)) -> Iterator[None]:
    """Turn termination signals into SystemExit so cleanup handlers run."""

    previous = {s: signal.signal(s, _raise_exit) for s in signums}
    try:
        yield
    finally:
        for s, handler in previous.items():
            signal.signal(s, handler)


def run(
    *,
    cfg: UpdaterConfig,
    options: Options,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """Run the update pipeline. Working directory and lock are released on every exit path."""

    state: Dict[str, Any] = {
        "install_dir": str(cfg.install_dir),
        "execution": {"current_step": None, "halt": None},
    }

    with ExitStack() as resources, exit_on_signals():
        if session is None:
            session = resources.enter_context(build_session(cfg.user_agent))
        ctx = UpdateCtx(cfg=cfg, options=options, session=session, resources=resources)

        try:
            result = run_pipeline(ctx=ctx, state=state, steps=build_steps())
        except Exception:
            logger.debug("Failed in step %s", (state.get("execution") or {}).get("current_step"))
            raise

        state = result.state
        state["execution"]["ran_steps"] = result.ran_steps

    if result.halt_reason is None:
        logger.info("Done")
    return state


def resolve_install_dir(cfg: UpdaterConfig, cli_install_dir: Optional[str]) -> UpdaterConfig:
    """Default to the updater's own directory when it lives inside an installation."""

    if cli_install_dir is not None:
        return cfg.with_overrides(install_dir=cli_install_dir)
    if cfg.raw.get("install_dir"):
        return cfg
    home = entry_install_dir(cfg.start_script)
    if home is None:
        return cfg
    logger.info("Using installation directory %s", home)
    return cfg.with_overrides(install_dir=str(home))


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    options, args = parse_options(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if options.verbose else logging.INFO)

    try:
        cfg = resolve_install_dir(load_config(args.config), args.install_dir)
        run(cfg=cfg, options=options)
    except UpdaterError as e:
        logger.error("%s: %s", e.kind, e)
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    except Exception:
        logger.exception("Updater failed")
        return 1
    return 0
