"""CLI helper to print page info and links for a URL."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys

from navbot.browser.manager import AgentManager
from navbot.config import configure_logging, load_settings
from navbot.fetch import fetch_page


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Open a URL with the navbot agent and print what it sees.",
    )
    parser.add_argument("url", help="Page to inspect (e.g. https://example.com)")
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless.",
    )
    parser.add_argument(
        "--links",
        type=int,
        default=20,
        help="Maximum number of links to print (default: 20).",
    )
    parser.add_argument(
        "--fetch",
        action="store_true",
        help="Use a plain HTTP fetch instead of launching a browser.",
    )
    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings.log_level)

    if args.fetch:
        output = asyncio.run(fetch_page(args.url)).to_dict()
    else:
        with AgentManager(settings) as manager:
            started = manager.start(headless=not args.headed)
            if not started.success:
                output = started.to_dict()
            else:
                navigated = manager.call("navigate", args.url)
                if not navigated.success:
                    output = navigated.to_dict()
                else:
                    output = {
                        "page": manager.call("get_page_info").to_dict(),
                        "links": manager.call("extract_links", max_links=args.links).to_dict(),
                    }

    print(json.dumps(output, indent=2))
    return 0 if output.get("success", True) else 1


if __name__ == "__main__":
    sys.exit(main())
