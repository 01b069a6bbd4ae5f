#!/usr/bin/env python3
"""
Query the card index locally, without starting the API server.
Builds the index from CORPUS_PATH (or .env.local) and prints results.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
load_dotenv(project_root / ".env.local")

from cardsearch.corpus_loader import CorpusLoadError, load_records
from cardsearch.index import IndexBuildError, build_index
from cardsearch.service import CardSearchService


def load_service() -> CardSearchService:
    """Load the corpus and build the index, exiting on failure."""
    corpus_path = os.getenv("CORPUS_PATH", str(project_root / "data" / "Credit_Card_Details.xlsx"))
    try:
        return CardSearchService(build_index(load_records(corpus_path)))
    except (CorpusLoadError, IndexBuildError) as e:
        print(f"Error building index: {e}", file=sys.stderr)
        sys.exit(1)


def print_ranking(service: CardSearchService, term: str) -> None:
    """Print page-ranking results as a table."""
    results = service.ranked_search_results(term)["results"]

    print(f"\nRanked results for '{term}':")
    print("=" * 80)
    if not results:
        print("No matching cards.")
    else:
        header = f"{'relevance':>10} | {'hits':>4} | {'bank':20} | title"
        print(header)
        print("-" * len(header))
        for item in results:
            print(f"{item['relevance']:10.4f} | {item['occurrences']:4d} | {item['bank'][:20]:20} | {item['title']}")
    print("=" * 80)
    print(f"Total cards: {len(results)}")


def main():
    """Main entry point."""
    if len(sys.argv) < 3:
        print("Usage:")
        print('  python scripts/query_index.py rank "travel rewards"')
        print("  python scripts/query_index.py complete tra")
        print("  python scripts/query_index.py spell travle")
        print("  python scripts/query_index.py freq travel")
        sys.exit(1)

    command, argument = sys.argv[1], " ".join(sys.argv[2:])
    service = load_service()

    if command == "rank":
        print_ranking(service, argument)
    elif command == "complete":
        for word in service.autocomplete(argument):
            print(word)
    elif command == "spell":
        suggestions = service.spelling_suggestions(argument)
        print(", ".join(suggestions) if suggestions else "No suggestions.")
    elif command == "freq":
        print(f"{argument}: {service.word_frequency(argument)}")
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
