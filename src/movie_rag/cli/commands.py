"""
CLI commands - entry points for the movie question answering pipeline.

Each command follows a consistent pattern:
1. Parse arguments
2. Load environment
3. Build the pipeline from config
4. Print results
5. Return exit code

CLI commands are thin wrappers: argument parsing and output formatting
only. The actual work is delegated to the pipeline and retrieval modules.
"""

from __future__ import annotations

import argparse
import logging
import sys

from movie_rag.core import PipelineError

EXIT_PROMPT = "exit"


def _load_env() -> None:
    """Load environment variables from .env file."""
    from dotenv import load_dotenv

    load_dotenv()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mock", action="store_true", help="Use mock models (no API calls)")
    parser.add_argument("--data", help="movies.json corpus file (default: built-in movies)")
    parser.add_argument("--top-k", type=int, default=None, help="Documents to retrieve")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")


def _build_pipeline(args: argparse.Namespace):
    from movie_rag.config import PipelineConfig
    from movie_rag.observability import init_tracing
    from movie_rag.pipeline import create_pipeline

    _configure_logging(args.verbose)
    init_tracing()

    config = PipelineConfig.from_env()
    if args.data:
        config.data_path = args.data
    return create_pipeline(config, use_mock=args.mock)


def _print_result(result) -> int:
    from movie_rag.pipeline import PipelineFailure

    if isinstance(result, PipelineFailure):
        print(f"Error ({result.kind}): {result.message}")
        return 1
    print(result.text)
    return 0


def run_ask_cli() -> int:
    """CLI entry point: answer one question."""
    _load_env()

    parser = argparse.ArgumentParser(description="Answer one question about movies")
    parser.add_argument("question", nargs="+", help="Question to answer")
    _common_args(parser)
    parser.add_argument("--show-sources", action="store_true", help="Print retrieved movies")
    args = parser.parse_args()

    try:
        pipeline = _build_pipeline(args)
        result = pipeline.answer(" ".join(args.question), top_k=args.top_k)
    except PipelineError as e:
        print(f"Error ({e.kind}): {e}")
        return 2

    code = _print_result(result)
    if code == 0 and args.show_sources:
        print("\nSources:")
        for candidate in result.candidates:
            print(f"  - {candidate.document.title} (score: {candidate.score:.3f})")
    return code


def run_chat_cli() -> int:
    """CLI entry point: interactive question loop."""
    _load_env()

    parser = argparse.ArgumentParser(description="Ask questions about movies interactively")
    _common_args(parser)
    args = parser.parse_args()

    try:
        pipeline = _build_pipeline(args)
    except PipelineError as e:
        print(f"Error ({e.kind}): {e}")
        return 2

    print("Welcome to Movie AI! Ask me anything about movies.")
    print(f'Type "{EXIT_PROMPT}" to quit.\n')

    while True:
        try:
            question = input("Ask me about movies: ").strip()
        except EOFError:
            break

        if question.lower() == EXIT_PROMPT:
            break
        if not question:
            continue

        try:
            result = pipeline.answer(question, top_k=args.top_k)
        except PipelineError as e:
            print(f"Error ({e.kind}): {e}\n")
            continue

        _print_result(result)
        print()

    print("Goodbye!")
    return 0


def run_search_cli() -> int:
    """CLI entry point: show the ranked movies for a question."""
    _load_env()

    parser = argparse.ArgumentParser(description="Rank movies for a question without generating")
    parser.add_argument("question", nargs="+", help="Search text")
    _common_args(parser)
    args = parser.parse_args()

    try:
        pipeline = _build_pipeline(args)
        candidates = pipeline.search(" ".join(args.question), top_k=args.top_k)
    except PipelineError as e:
        print(f"Error ({e.kind}): {e}")
        return 1

    if not candidates:
        print("No vectorized movies found.")
        return 0

    for i, candidate in enumerate(candidates, 1):
        doc = candidate.document
        year = f" ({doc.year})" if doc.year is not None else ""
        print(f"{i}. {doc.title}{year} [{doc.genre or 'Unknown'}]")
        print(f"   Similarity: {candidate.score * 100:.1f}%")
    return 0


def run_vectorize_cli() -> int:
    """CLI entry point: fill in embeddings for a movies.json file."""
    from movie_rag.config import PipelineConfig
    from movie_rag.embeddings import get_embedding_provider
    from movie_rag.retrieval import load_documents, save_documents, vectorize_documents

    _load_env()

    parser = argparse.ArgumentParser(description="Vectorize a movies.json corpus file")
    parser.add_argument("--input", required=True, help="movies.json to read")
    parser.add_argument("--output", help="File to write (default: overwrite input)")
    parser.add_argument(
        "--fields",
        nargs="*",
        default=[],
        help="Per-field vectors to add, e.g. titleVector descriptionVector",
    )
    parser.add_argument("--batch-size", type=int, default=5, help="Texts per request")
    parser.add_argument("--mock", action="store_true", help="Use mock embeddings")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    _configure_logging(args.verbose)

    try:
        config = PipelineConfig.from_env()
        embedder = get_embedding_provider(use_mock=args.mock, config=config.embedding)
        documents = load_documents(args.input)
        print(f"Found {len(documents)} movies to vectorize")
        vectorized = vectorize_documents(
            documents,
            embedder,
            batch_size=args.batch_size,
            fields=args.fields,
            timeout=config.embed_timeout_s,
        )
    except (PipelineError, FileNotFoundError) as e:
        print(f"Error: {e}")
        return 1

    save_documents(args.output or args.input, vectorized)
    print(f"Vectorization complete! Wrote {len(vectorized)} movies.")
    return 0


def run_check_config_cli() -> int:
    """CLI entry point: show configuration and optionally ping the models."""
    from movie_rag.config import PipelineConfig

    _load_env()

    parser = argparse.ArgumentParser(description="Check configuration")
    parser.add_argument("--ping", action="store_true", help="Send a test request to each model")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    _configure_logging(args.verbose)

    try:
        config = PipelineConfig.from_env()
    except PipelineError as e:
        print(f"Error: {e}")
        return 1

    print("=" * 60)
    print("CONFIGURATION")
    print("=" * 60)
    for label, model in (("LLM", config.llm), ("Embedding", config.embedding)):
        target = model.endpoint or "api.openai.com"
        print(f"  {label}: {model.deployment} @ {target}")
    print(f"  Top K: {config.top_k}")
    print(f"  Scoring: {config.scoring.strategy} (primary field: {config.scoring.primary_field})")
    print(f"  Corpus: {config.data_path or 'built-in seed movies'}")

    problems = config.validate()
    for problem in problems:
        print(f"  [MISSING] {problem}")

    if args.ping and not problems:
        from movie_rag.embeddings import get_embedding_provider
        from movie_rag.generation import get_generator
        from movie_rag.pipeline import validate_models

        checks = validate_models(
            get_embedding_provider(config=config.embedding),
            get_generator(config=config.llm),
        )
        for check in checks:
            status = "OK" if check.available else "FAIL"
            print(f"  [{status}] {check.name}: {check.detail}")
        if not all(check.available for check in checks):
            return 1

    return 1 if problems else 0


def main() -> int:
    """
    Main CLI entry point with subcommands.

    Usage:
        movie-rag ask "question"     # Answer one question
        movie-rag chat               # Interactive loop
        movie-rag search "question"  # Ranked movies only
        movie-rag vectorize --input movies.json
        movie-rag check-config       # Show/validate configuration
    """
    parser = argparse.ArgumentParser(
        description="Movie question answering with retrieval-augmented generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  ask           Answer one question
  chat          Interactive question loop
  search        Show the most similar movies for a question
  vectorize     Add embeddings to a movies.json file
  check-config  Show configuration and missing settings

Examples:
  movie-rag ask "What are good space adventure movies?" --show-sources
  movie-rag chat --data data/movies.json
  movie-rag ask "Who directed Inception?" --mock
        """,
    )

    parser.add_argument(
        "command",
        choices=["ask", "chat", "search", "vectorize", "check-config"],
        help="Command to run",
    )

    # Parse just the command first
    args, remaining = parser.parse_known_args()

    commands = {
        "ask": run_ask_cli,
        "chat": run_chat_cli,
        "search": run_search_cli,
        "vectorize": run_vectorize_cli,
        "check-config": run_check_config_cli,
    }

    # Re-inject remaining args for the subcommand
    sys.argv = [sys.argv[0]] + remaining

    from movie_rag.observability import shutdown_tracing

    try:
        return commands[args.command]()
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    finally:
        # Flush spans buffered by the batch processor
        shutdown_tracing()


if __name__ == "__main__":
    sys.exit(main())
