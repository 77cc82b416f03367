"""Plain-text rendering of a session for the terminal."""

from __future__ import annotations

from commit_reveal import shell_command
from protocol import Hand
from rounds import PendingRound, ResolvedRound
from session import Session

NO_THROW_ICON = "👌🏼"


def hand_label(hand: Hand, plain: bool = False) -> str:
    return hand.name_token if plain else hand.icon


def format_hands(session: Session, plain: bool = False) -> str:
    pair = session.last_human_vs_opponent()
    if pair is None:
        opponent = "-" if plain else NO_THROW_ICON
    else:
        opponent = hand_label(pair[1], plain)
    choices = "  ".join(f"({h.name_token[0]}){h.name_token[1:]} {hand_label(h, plain)}" for h in Hand)
    return f"Computer: {opponent}   V.S.   {choices}"


def format_current_round(round_: PendingRound) -> str:
    return (
        f"Current round (#{round_.number})\n"
        f"   The computer has picked a shape by claiming {round_.commitment}."
    )


def format_round(round_: ResolvedRound | None, is_latest: bool, plain: bool = False) -> str:
    number = round_.number if round_ is not None else 0
    header = f"Last round (#{number})" if is_latest else f"Round #{number}"
    if round_ is None:
        return f"{header}\n   N/A"

    return "\n".join(
        [
            header,
            f"   {hand_label(round_.human_hand, plain)} V.S. {hand_label(round_.opponent_hand, plain)}"
            f" ➯ {round_.result_description}",
            "   You can verify this by running",
            f"      {shell_command(round_.commitment_record)}",
            "   and check whether the output is",
            f"      {round_.commitment}",
        ]
    )


def format_history(history: tuple[ResolvedRound, ...], plain: bool = False) -> str:
    if not history:
        return "(no rounds yet)"

    width = 9 if plain else 4
    lines: list[str] = []
    header = f"{'#':>4}  {'You':<{width}}  {'Computer':<{width}}  {'Result':<6}  {'Random':<8}  {'Digest':<8}"
    lines.append(header)
    lines.append("-" * len(header))
    for r in history:
        lines.append(
            f"{r.number:>4}  {hand_label(r.human_hand, plain):<{width}}  {hand_label(r.opponent_hand, plain):<{width}}"
            f"  {r.outcome.letter:<6}  {r.nonce_prefix():<8}  {r.digest_prefix():<8}"
        )
    return "\n".join(lines)


def format_session(session: Session, plain: bool = False) -> str:
    round_, is_latest = session.displayed_round()
    sections = [
        format_hands(session, plain),
        format_current_round(session.current_round),
        "Scoreboard: " + session.scoreboard.format_line(),
        format_round(round_, is_latest, plain),
    ]
    return "\n\n".join(sections)
