"""
ReferHub command line client.

Drives the same auth and dashboard controllers a UI would, keeping the
session in a JSON file between invocations.
"""

import argparse
import getpass
import sys

from referhub.client import (
    FileStorage,
    Notifier,
    ReferHubApp,
    SessionStore,
    resume_view_url,
)
from referhub.core.config import settings
from referhub.core.logging_config import setup_logging
from referhub.models.candidate import CANDIDATE_STATUSES


def _echo(level: str, message: str) -> None:
    stream = sys.stderr if level == "error" else sys.stdout
    print(message, file=stream)


def build_app(args: argparse.Namespace) -> ReferHubApp:
    session = SessionStore(FileStorage(args.session_file))
    confirm = (lambda prompt: True) if getattr(args, "yes", False) else _ask
    return ReferHubApp(session, notifier=Notifier(echo=_echo), confirm=confirm)


def _ask(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


def _require_login(app: ReferHubApp) -> bool:
    if not app.is_authenticated:
        print("Not logged in. Run: referhub login", file=sys.stderr)
        return False
    return True


def print_candidates(candidates, empty_message) -> None:
    if not candidates:
        print(empty_message or "")
        return
    for c in candidates:
        print(f"{c['id']}  [{c['status']}]  {c['name']} - {c['job_title']}")
        print(f"    {c['email']}  {c['phone']}")
        link = resume_view_url(c.get("resume_url"))
        if link:
            print(f"    Resume: {link}")


def cmd_login(app: ReferHubApp, args: argparse.Namespace) -> bool:
    page = app.auth_page
    if args.command == "signup":
        page.toggle_mode()
        page.update("full_name", args.full_name or input("Full name: "))
    page.update("email", args.email or input("Email: "))
    page.update("password", args.password or getpass.getpass("Password: "))
    return page.submit()


def cmd_logout(app: ReferHubApp, args: argparse.Namespace) -> bool:
    app.dashboard.logout()
    return True


def cmd_list(app: ReferHubApp, args: argparse.Namespace) -> bool:
    if not _require_login(app):
        return False
    dashboard = app.dashboard
    dashboard.query.search = args.search or ""
    dashboard.query.status_filter = args.status or ""
    ok = dashboard.fetch_candidates()
    if ok:
        print_candidates(dashboard.candidates, dashboard.empty_message)
    return ok


def cmd_stats(app: ReferHubApp, args: argparse.Namespace) -> bool:
    if not _require_login(app):
        return False
    dashboard = app.dashboard
    if not dashboard.fetch_stats():
        print("Could not load stats", file=sys.stderr)
        return False
    for key, value in dashboard.stats.items():
        print(f"{key.capitalize():<10}{value}")
    return True


def cmd_refer(app: ReferHubApp, args: argparse.Namespace) -> bool:
    if not _require_login(app):
        return False
    form = app.dashboard.form
    form.name = args.name
    form.email = args.email
    form.phone = args.phone
    form.job_title = args.job_title
    form.resume = args.resume
    return app.dashboard.submit_referral()


def cmd_status(app: ReferHubApp, args: argparse.Namespace) -> bool:
    if not _require_login(app):
        return False
    return app.dashboard.update_status(args.candidate_id, args.status)


def cmd_delete(app: ReferHubApp, args: argparse.Namespace) -> bool:
    if not _require_login(app):
        return False
    return app.dashboard.delete_candidate(args.candidate_id)


def cmd_serve(args: argparse.Namespace) -> bool:
    import uvicorn

    uvicorn.run("referhub.main:app", host=args.host, port=args.port, reload=args.reload)
    return True


COMMANDS = {
    "login": cmd_login,
    "signup": cmd_login,
    "logout": cmd_logout,
    "list": cmd_list,
    "stats": cmd_stats,
    "refer": cmd_refer,
    "status": cmd_status,
    "delete": cmd_delete,
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="referhub", description="Track candidate referrals.")
    parser.add_argument(
        "--session-file",
        default=settings.REFERHUB_SESSION_FILE,
        help="Where the access token and user profile are kept.",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("login", "signup"):
        p = sub.add_parser(name, help=f"{name.capitalize()} and store the session.")
        p.add_argument("--email")
        p.add_argument("--password")
        if name == "signup":
            p.add_argument("--full-name", dest="full_name")

    sub.add_parser("logout", help="Forget the stored session.")

    p = sub.add_parser("list", help="List referred candidates.")
    p.add_argument("--search", help="Match against name or job title.")
    p.add_argument("--status", choices=CANDIDATE_STATUSES)

    sub.add_parser("stats", help="Show referral counts per status.")

    p = sub.add_parser("refer", help="Refer a new candidate.")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("phone")
    p.add_argument("job_title")
    p.add_argument("--resume", help="Path to a PDF resume.")

    p = sub.add_parser("status", help="Change a candidate's status.")
    p.add_argument("candidate_id")
    p.add_argument("status", choices=CANDIDATE_STATUSES)

    p = sub.add_parser("delete", help="Delete a candidate.")
    p.add_argument("candidate_id")
    p.add_argument("--yes", action="store_true", help="Skip the confirmation prompt.")

    p = sub.add_parser("serve", help="Run the API server.")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging("DEBUG" if args.debug else "WARNING")

    if args.command == "serve":
        return 0 if cmd_serve(args) else 1

    app = build_app(args)
    ok = COMMANDS[args.command](app, args)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
