"""CLI entry point for jsonfeeder."""
import argparse
import dataclasses
import logging
import sys

import yaml

from jsonfeeder import __version__
from jsonfeeder.builder import FeedBuilder
from jsonfeeder.formatters import ConsoleFormatter, JSONFeedFormatter
from jsonfeeder.models import FeedError
from jsonfeeder.sources import ContentSource, FileSource, RSSSource, SiteMeta, SourceError


def _open_source(args) -> ContentSource:
    """Pick a source from the SOURCE argument: URLs are RSS/Atom feeds, anything else a file."""
    if args.source.lower().startswith(("http://", "https://")):
        return RSSSource(args.source, timeout=args.timeout, max_retries=args.retries)
    return FileSource(args.source)


def _apply_overrides(site: SiteMeta, args) -> SiteMeta:
    overrides = {}
    if args.title:
        overrides["title"] = args.title
    if args.comment:
        overrides["comment"] = args.comment
    if args.feed_url:
        overrides["feed_url"] = args.feed_url
    if args.next_url:
        overrides["next_url"] = args.next_url
    if args.excerpt_only:
        overrides["use_excerpt_only"] = True
    return dataclasses.replace(site, **overrides) if overrides else site


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="jsonfeeder",
        description="Build a JSON Feed from a YAML/JSON post file or an RSS/Atom feed",
    )
    parser.add_argument("source", nargs="?", default=None,
                        help="Path to a .yaml/.yml/.json post file, or an RSS/Atom feed URL")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Write the feed to a file instead of stdout")
    parser.add_argument("--title", type=str, default=None,
                        help="Override the site title")
    parser.add_argument("--comment", type=str, default=None,
                        help="Comment for humans reading the feed (user_comment)")
    parser.add_argument("--feed-url", type=str, default=None, dest="feed_url",
                        help="Absolute URL where the generated feed will be published")
    parser.add_argument("--next-url", type=str, default=None, dest="next_url",
                        help="Absolute URL of the next page of items")
    parser.add_argument("--excerpt-only", action="store_true", dest="excerpt_only",
                        help="Publish summaries only, never full content")
    parser.add_argument("--indent", type=int, default=None,
                        help="Pretty-print JSON with this indent (default: compact)")
    parser.add_argument("--timeout", type=int, default=15,
                        help="HTTP request timeout in seconds for feed URLs (default: 15)")
    parser.add_argument("--retries", type=int, default=2,
                        help="Max retries per request for feed URLs (default: 2)")
    parser.add_argument("--stats", action="store_true",
                        help="Print a summary of the built feed instead of the JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status messages on stderr")
    parser.add_argument("--no-config", action="store_true",
                        help="Ignore config files (~/.jsonfeeder.yaml, ./jsonfeeder.yaml)")
    parser.add_argument("--init-config", action="store_true", dest="init_config",
                        help="Write a starter ~/.jsonfeeder.yaml and exit")

    args = parser.parse_args(argv)

    # Apply config file defaults (CLI args always win)
    if not args.no_config:
        from jsonfeeder.config import apply_config_defaults
        args = apply_config_defaults(parser, args)

    if args.init_config:
        from jsonfeeder.config import generate_starter_config
        path = generate_starter_config()
        print(f"Wrote starter config to {path}")
        return

    if not args.source:
        parser.error("the following arguments are required: source")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        source = _open_source(args)
        site = _apply_overrides(source.site(), args)
        feed = FeedBuilder().build_feed(site, source.records())
        if args.stats:
            output = ConsoleFormatter().format(feed.to_document())
        else:
            output = JSONFeedFormatter(indent=args.indent).format(feed)
        if args.output and not args.stats:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
    except (FeedError, SourceError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output and not args.stats:
        if not args.quiet:
            print(f"Wrote {len(feed)} items to {args.output}", file=sys.stderr)
    else:
        print(output)


if __name__ == "__main__":
    main()
