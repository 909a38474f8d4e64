"""
Branch interaction detection between the natal branches.

Reports combinations (六合), clashes (六冲), harms (六害), destructions (相破),
three-harmony frames (三合) and punishments (刑). This module FLAGS only;
the balance engine does its own clash check and does not read these records.
"""

from typing import Optional

from fourpillars.tables import EARTHLY_BRANCHES, Element, EarthlyBranch, branch_of


# Six Combinations (六合) - 1:1 pairings that can transform
SIX_COMBINATIONS = {
    frozenset((0, 1)): Element.EARTH,    # 子丑
    frozenset((2, 11)): Element.WOOD,    # 寅亥
    frozenset((3, 10)): Element.FIRE,    # 卯戌
    frozenset((4, 9)): Element.METAL,    # 辰酉
    frozenset((5, 8)): Element.WATER,    # 巳申
    frozenset((6, 7)): Element.FIRE,     # 午未
}

# Three Harmony frames (三合)
THREE_HARMONY = {
    (2, 6, 10): Element.FIRE,     # 寅午戌
    (8, 0, 4): Element.WATER,     # 申子辰
    (5, 9, 1): Element.METAL,     # 巳酉丑
    (11, 3, 7): Element.WOOD,     # 亥卯未
}

SIX_CLASHES = {frozenset(p) for p in [(0, 6), (1, 7), (2, 8), (3, 9), (4, 10), (5, 11)]}
SIX_HARMS = {frozenset(p) for p in [(0, 7), (1, 6), (2, 5), (3, 4), (8, 11), (9, 10)]}
DESTRUCTIONS = {frozenset(p) for p in [(0, 9), (1, 4), (2, 11), (3, 6), (5, 8), (7, 10)]}

# 无恩之刑 寅巳申, 恃势之刑 丑戌未, 无礼之刑 子卯, 自刑 辰午酉亥
PUNISHMENTS = {
    "无恩之刑": [2, 5, 8],
    "恃势之刑": [1, 10, 7],
    "无礼之刑": [0, 3],
    "自刑": [4, 6, 9, 11],
}

PAIR_RULES = [
    ("六合", lambda pair: pair in SIX_COMBINATIONS),
    ("六冲", lambda pair: pair in SIX_CLASHES),
    ("六害", lambda pair: pair in SIX_HARMS),
    ("相破", lambda pair: pair in DESTRUCTIONS),
]


def _label(label: str, branch: EarthlyBranch) -> str:
    return f"{label}:{branch.chinese}"


def find_branch_interactions(branches: list[str], labels: Optional[list[str]] = None) -> list[dict]:
    """
    Find all branch interactions between a set of branches.

    Args:
        branches: branch symbols, e.g. ["午", "卯", "酉", "巳"]
        labels: optional labels for each branch (e.g. "year", "month", "annual")

    Returns:
        List of interaction dicts with type, branches involved, and result
    """
    resolved = [branch_of(b) for b in branches]
    if labels is None:
        labels = [f"branch_{i}" for i in range(len(resolved))]

    interactions = []
    n = len(resolved)

    for i in range(n):
        for j in range(i + 1, n):
            b1, b2 = resolved[i], resolved[j]
            pair = frozenset((b1.index, b2.index))
            for kind, matches in PAIR_RULES:
                if not matches(pair):
                    continue
                record = {
                    "type": kind,
                    "branches": [_label(labels[i], b1), _label(labels[j], b2)],
                }
                if kind == "六合":
                    record["result_element"] = SIX_COMBINATIONS[pair].chinese
                interactions.append(record)

    positions = {}
    for i, b in enumerate(resolved):
        positions.setdefault(b.index, i)

    for triple, element in THREE_HARMONY.items():
        present = [idx for idx in triple if idx in positions]
        if len(present) < 2:
            continue
        record = {
            "type": "三合" if len(present) == 3 else "半三合",
            "branches": [_label(labels[positions[idx]], resolved[positions[idx]]) for idx in present],
            "result_element": element.chinese,
        }
        if len(present) == 2:
            missing = [idx for idx in triple if idx not in positions][0]
            record["missing"] = EARTHLY_BRANCHES[missing].chinese
        interactions.append(record)

    for kind, members in PUNISHMENTS.items():
        if kind == "自刑":
            for idx in members:
                hits = [i for i in range(n) if resolved[i].index == idx]
                if len(hits) >= 2:
                    interactions.append({
                        "type": kind,
                        "branches": [_label(labels[i], resolved[i]) for i in hits],
                    })
            continue
        present = [idx for idx in members if idx in positions]
        if len(present) >= 2:
            interactions.append({
                "type": kind,
                "branches": [_label(labels[positions[idx]], resolved[positions[idx]]) for idx in present],
                "complete": len(present) == len(members),
            })

    return interactions
