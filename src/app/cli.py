from __future__ import annotations

import argparse
import logging
from typing import Callable

from commit_reveal import HASH_ALGORITHM, verification_string, verify_commitment
from protocol import InvalidHand, is_valid_hand, parse_hand
from session import InvalidSelection, Session
from view import format_history, format_round, format_session

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Commands: (r)ock, (p)aper, (s)cissors to throw | h = history | "
    "i N = inspect round N | l = latest round | n = restart | q = quit"
)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="rps")
    sub = parser.add_subparsers(dest="cmd", required=True)

    play = sub.add_parser("play", help="Play against a committed computer opponent")
    play.add_argument("--plain", action="store_true", help="Show hand names instead of emoji")
    play.add_argument("--verbose", action="store_true", help="Log round commitments and results")

    verify = sub.add_parser("verify", help="Check a revealed round against its commitment")
    verify.add_argument("--nonce", required=True, help="Revealed nonce as lowercase hex")
    verify.add_argument("--hand", required=True, help="rock|paper|scissors")
    verify.add_argument("--commitment", required=True, help=f"{HASH_ALGORITHM} digest shown before the throw")

    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", False))

    if args.cmd == "verify":
        return _verify(args.nonce, args.hand, args.commitment)

    if args.cmd == "play":
        run_interactive(plain=args.plain)
        return 0

    raise SystemExit("unhandled command")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _verify(nonce_hex: str, hand_text: str, commitment: str) -> int:
    if not is_valid_hand(hand_text):
        raise SystemExit("--hand must be rock|paper|scissors")
    hand = parse_hand(hand_text)
    try:
        revealed = verification_string(bytes.fromhex(nonce_hex), hand)
    except ValueError:
        raise SystemExit("--nonce must be hex") from None

    ok = verify_commitment(expected_commitment=commitment, nonce_hex=nonce_hex, hand=hand)
    print(f"Verification string: {revealed}")
    if ok:
        print(f"✅ {HASH_ALGORITHM} matches the commitment")
        return 0
    print(f"❌ {HASH_ALGORITHM} does not match the commitment")
    return 1


def run_interactive(
    *,
    plain: bool = False,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    new_session: Callable[[], Session] = Session.new,
) -> Session:
    """Event loop: one line of input is one event applied to the session.

    Returns the session that was live when the loop ended.
    """
    session = new_session()
    write("🎮 Rock, paper, scissors. The computer commits to its hand before you throw.")
    write(HELP_TEXT)
    write(format_session(session, plain))

    while True:
        try:
            line = read(f"Round {session.current_round.number} > ").strip().lower()
        except EOFError:
            return session

        if not line:
            continue
        if line in ("q", "quit", "exit"):
            return session
        if line in ("?", "help"):
            write(HELP_TEXT)
            continue
        if line in ("h", "history"):
            write(format_history(session.history, plain))
            continue
        if line in ("l", "latest"):
            session.clear_selection()
            round_, is_latest = session.displayed_round()
            write(format_round(round_, is_latest, plain))
            continue
        if line in ("n", "new", "restart"):
            session = new_session()
            logger.info("Session restarted")
            write(format_session(session, plain))
            continue
        if line.startswith("i"):
            _inspect(session, line, plain, write)
            continue

        try:
            hand = parse_hand(line)
        except InvalidHand:
            write("❌ Invalid choice. " + HELP_TEXT)
            continue
        session.submit_throw(hand)
        write(format_session(session, plain))


def _inspect(session: Session, line: str, plain: bool, write: Callable[[str], None]) -> None:
    parts = line.split()
    if len(parts) != 2 or parts[0] not in ("i", "inspect") or not parts[1].isdecimal():
        write("❌ Usage: i N (round number from the history table)")
        return
    try:
        session.select(int(parts[1]) - 1)
    except InvalidSelection:
        write(f"❌ No round #{parts[1]} yet ({session.num_rounds} played)")
        return
    round_, is_latest = session.displayed_round()
    write(format_round(round_, is_latest, plain))


if __name__ == "__main__":
    raise SystemExit(main())
