"""Entry point: raidstat [options]."""

import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .cli import parse_args
from .collectors import run_all
from .errors import RaidstatError
from .executor import make_executor
from .grammar import MEGACLI_GRAMMAR, Grammar, load_grammar
from .logging_config import setup_logging
from .pipeline import load_snapshot
from .renderers import make_environment, run_all as run_all_renderers
from .renderers.summary import render_text
from .schema import InventorySnapshot

logger = logging.getLogger("raidstat")


def _load_grammar(args) -> Grammar:
    grammar = load_grammar(args.grammar) if args.grammar else MEGACLI_GRAMMAR
    if args.by_path_dir:
        grammar = grammar.model_copy(update={"by_path_dir": str(args.by_path_dir)})
    return grammar


def _collect(args) -> InventorySnapshot:
    if args.from_snapshot:
        return load_snapshot(args.from_snapshot)
    return run_all(
        executor=make_executor(args.timeout),
        megacli=args.megacli,
        adapter_count=args.adapter_count,
        grammar=_load_grammar(args),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        snapshot = _collect(args)
    except (OSError, ValidationError) as e:
        logger.error("%s", e)
        return 2
    except RaidstatError as e:
        logger.error("%s", e)
        return 1

    if args.output_dir:
        run_all_renderers(snapshot, args.output_dir)
    if args.format == "summary":
        sys.stdout.write(render_text(snapshot, make_environment()))
    else:
        sys.stdout.write(snapshot.model_dump_json(indent=2) + "\n")
    return 1 if snapshot.errors else 0


if __name__ == "__main__":
    sys.exit(main())
