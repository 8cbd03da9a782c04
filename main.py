#!/usr/bin/env python3
"""
Feedback Hub - command-line access to feedback data.

Command-line entry point for inspecting the record backend:
  - List and filter feedback posts
  - Show a single post with its comment threads
  - Show the roadmap board and the changelog

Usage:
    python main.py posts                          # All posts
    python main.py posts --sort trending          # Posts by trending score
    python main.py posts --status planned -s dark # Filter and search
    python main.py post 12                        # One post with comments
    python main.py roadmap                        # Roadmap board
    python main.py changelog                      # Release notes
    python main.py --show-config                  # Current configuration
"""

import argparse
import sys
from typing import Dict, List, Optional

from feedback_hub import __version__
from feedback_hub.client import RecordClient, create_default_client, set_record_client
from feedback_hub.config import print_config_summary, setup_logging, validate_config
from feedback_hub.errors import FeedbackHubError
from feedback_hub.models import POST_STATUSES, ROADMAP_STAGES, ChangelogEntry, Comment, FeedbackPost, RoadmapItem
from feedback_hub.services import (
    SORT_MODES,
    ChangelogService,
    CommentService,
    FeedbackService,
    RoadmapService,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="feedback-hub",
        description="Browse feedback posts, comments, the roadmap and the changelog.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s posts                             List posts in backend order
  %(prog)s posts --sort votes                Most voted first
  %(prog)s posts --category bug --status planned
  %(prog)s posts --search "dark mode"        Search titles and descriptions
  %(prog)s post 12                           Show post 12 and its comments
  %(prog)s comments 4 --roadmap              Comments on roadmap item 4
  %(prog)s roadmap                           Show the roadmap board
  %(prog)s -v changelog                      Changelog with debug logging
        """,
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    posts = subparsers.add_parser("posts", help="List feedback posts")
    posts.add_argument(
        "--category", "-c",
        action="append",
        dest="categories",
        metavar="NAME",
        help="Only posts in this category (repeatable)",
    )
    posts.add_argument(
        "--status",
        action="append",
        dest="statuses",
        choices=POST_STATUSES,
        help="Only posts with this status (repeatable)",
    )
    posts.add_argument(
        "--search", "-s",
        metavar="TEXT",
        help="Search titles and descriptions",
    )
    posts.add_argument(
        "--sort",
        dest="sort_by",
        choices=SORT_MODES,
        help="Sort order (default: backend order)",
    )

    post = subparsers.add_parser("post", help="Show one post and its comments")
    post.add_argument("post_id", help="Post id")

    comments = subparsers.add_parser("comments", help="Show a comment thread")
    comments.add_argument("target_id", help="Post id (or roadmap item id with --roadmap)")
    comments.add_argument(
        "--roadmap",
        action="store_true",
        help="Treat the id as a roadmap item id",
    )

    subparsers.add_parser("roadmap", help="Show the roadmap board")
    subparsers.add_parser("changelog", help="Show changelog entries")

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("Feedback Hub Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


# =============================================================================
# Output formatting
# =============================================================================

def format_post(post: FeedbackPost) -> str:
    author = "Anonymous" if post.is_anonymous else post.author_name
    return (
        f"#{post.id:<5} [{post.status:<12}] {post.title} "
        f"({post.vote_count} votes, {post.comment_count} comments, by {author})"
    )


def print_posts(posts: List[FeedbackPost]) -> None:
    if not posts:
        print("No posts found.")
        return
    for post in posts:
        print(format_post(post))
    print(f"\n{len(posts)} post(s)")


def print_comments(comments: List[Comment]) -> None:
    if not comments:
        print("  (no comments)")
        return
    for comment in comments:
        print(f"  - {comment.author_name}: {comment.content}")
        for reply in comment.replies:
            print(f"      ↳ {reply.author_name}: {reply.content}")


def print_roadmap(board: Dict[str, List[RoadmapItem]]) -> None:
    for stage in ROADMAP_STAGES:
        items = board.get(stage, [])
        print(f"\n{stage.upper()} ({len(items)})")
        print("-" * 40)
        for item in items:
            title = item.post.title if item.post else f"post {item.feedback_post_id}"
            eta = item.estimated_date.isoformat() if item.estimated_date else "n/a"
            print(f"  {item.position:>3}. {title} (eta {eta})")


def print_changelog(entries: List[ChangelogEntry]) -> None:
    if not entries:
        print("No changelog entries.")
        return
    for entry in entries:
        print(f"{entry.release_date.date().isoformat()}  [{entry.category or '-'}] {entry.title}")
        if entry.related_post_ids:
            print(f"            related posts: {', '.join(entry.related_post_ids)}")


# =============================================================================
# Entry point
# =============================================================================

def run_command(args: argparse.Namespace) -> int:
    """Execute the selected subcommand against the installed client."""
    if args.command == "posts":
        posts = FeedbackService().get_all(
            categories=args.categories,
            statuses=args.statuses,
            search=args.search,
            sort_by=args.sort_by,
        )
        print_posts(posts)

    elif args.command == "post":
        post = FeedbackService().get_by_id(args.post_id)
        print(format_post(post))
        if post.description:
            print(f"\n{post.description}")
        print("\nComments:")
        print_comments(CommentService().get_by_post_id(post.id))

    elif args.command == "comments":
        service = CommentService()
        if args.roadmap:
            print_comments(service.get_by_roadmap_item_id(args.target_id))
        else:
            print_comments(service.get_by_post_id(args.target_id))

    elif args.command == "roadmap":
        print_roadmap(RoadmapService().get_all())

    elif args.command == "changelog":
        print_changelog(ChangelogService().get_all())

    return 0


def main(argv: list = None, client: Optional[RecordClient] = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).
        client: Record client to use instead of the configured one.

    Returns:
        Exit code (0 = success, 1 = error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    if not args.command:
        parser.print_help()
        return 1

    setup_logging("DEBUG" if args.verbose else None)

    if client is not None:
        set_record_client(client)
    else:
        create_default_client()

    try:
        return run_command(args)

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130
    except (FeedbackHubError, ValueError) as e:
        print(f"\n❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
