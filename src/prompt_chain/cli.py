"""CLI entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from prompt_chain.chain_file import load_chain_file
from prompt_chain.io_utils import load_input, parse_input_json, write_output
from prompt_chain.llm.catalog import ModelCatalog
from prompt_chain.llm.service import LlmService
from prompt_chain.orchestrator import Orchestrator
from prompt_chain.repository import InMemoryRepository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="prompt-chain")
    parser.add_argument("--chain", type=str, required=True, help="Path to a chain definition file")
    input_group = parser.add_mutually_exclusive_group()
    input_group.add_argument("--input", type=str, help="Path to a JSON or YAML run input file")
    input_group.add_argument("--input-json", type=str, help="Run input as a JSON object")
    parser.add_argument("--output", type=str, help="Also write the result JSON to this file")
    parser.add_argument("--list-models", type=str, metavar="CREDENTIAL_ID", help="List models for a credential")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser


def list_models(llm_service: LlmService, credentials: dict[str, Any], credential_id: str) -> list[Any]:
    credential = credentials.get(credential_id)
    if credential is None:
        raise SystemExit(f"Unknown credential: {credential_id}")
    return list(ModelCatalog(llm_service).get_models_for(credential))


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    loaded = load_chain_file(Path(args.chain))
    repository = InMemoryRepository()
    chain = loaded.register(repository)
    orchestrator = Orchestrator(repository)

    if args.list_models:
        credentials = {str(credential.id): credential for credential in loaded.credentials}
        print(json.dumps(list_models(orchestrator.llm_service, credentials, args.list_models), indent=2))
        return 0

    if args.input is not None:
        input_data = load_input(Path(args.input))
    elif args.input_json is not None:
        input_data = parse_input_json(args.input_json)
    else:
        input_data = {}

    run = orchestrator.run_chain(chain.id, input_data)
    steps = repository.list_run_steps(run.tenant_id, run.id) if run.id is not None else []
    result = json.dumps(
        {
            "run": run.model_dump(mode="json"),
            "steps": [step.model_dump(mode="json") for step in steps],
        },
        indent=2,
    )
    if args.output:
        write_output(Path(args.output), result)
    print(result)
    return 0 if run.status == "success" else 1


if __name__ == "__main__":
    sys.exit(main())
