# scripts/turn_outs_report.py
from __future__ import annotations

import argparse
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from holdem_equity.helpers.cards import Card
from holdem_equity.helpers.outs import OUT_CATEGORY_NAMES, Out, OutsResult, calculate_turn_outs

# (name, hero, villain, turn board)
SCENARIOS: Tuple[Tuple[str, str, str, str], ...] = (
    ("Flush draw with overcards", "Ah Kh", "9d 9c", "Qh Jh 3d 2c"),
    ("Open-ended straight draw", "Js Ts", "Ah Ad", "9h 8d 3c 2h"),
    ("Pocket pair vs overpair", "9h 9s", "Ah Ad", "Kh Qd Jc 3s"),
    ("Gutshot", "9c 8c", "Kd Ks", "Jh 7d 2s 3h"),
    ("Board plays", "2c 3d", "4c 5d", "Ah Kh Qh Jh"),
)


def group_by_category(outs: Sequence[Out]) -> Dict[int, List[Card]]:
    groups: Dict[int, List[Card]] = defaultdict(list)
    for o in outs:
        groups[o.category].append(o.card)
    return groups


def format_report(name: str, hero: str, villain: str, board: str, res: OutsResult) -> str:
    lines = [
        "=" * 80,
        f"{name}",
        "=" * 80,
        f"Hero: {hero}   Villain: {villain}   Turn: {board}",
        f"Baseline  win {res.baseline_win * 100:6.2f}%  tie {res.baseline_tie * 100:6.2f}%  "
        f"lose {res.baseline_lose * 100:6.2f}%  ({res.total_river_cards} rivers)",
    ]
    if res.suppressed is not None:
        lines.append(f"Outs suppressed: {res.suppressed.reason}")
        return "\n".join(lines)

    for label, outs in (("Win outs", res.win_outs), ("Tie outs", res.tie_outs)):
        lines.append(f"{label}: {len(outs)} cards")
        for cat, cards in sorted(group_by_category(outs).items()):
            lines.append(f"  {OUT_CATEGORY_NAMES[cat]} ({len(cards)}): {', '.join(str(c) for c in cards)}")
    return "\n".join(lines)


def main() -> None:
    ap = argparse.ArgumentParser(description="Print river outs for canonical turn scenarios")
    ap.add_argument("--hero", type=str, default=None)
    ap.add_argument("--villain", type=str, default=None)
    ap.add_argument("--board", type=str, default=None)
    args = ap.parse_args()

    if args.hero and args.villain and args.board:
        scenarios = [("Custom", args.hero, args.villain, args.board)]
    else:
        scenarios = list(SCENARIOS)

    for name, hero, villain, board in scenarios:
        res = calculate_turn_outs(hero, villain, board)
        print(format_report(name, hero, villain, board, res))
        print()


if __name__ == "__main__":
    main()
