"""
Species detection.

Molecules are the connected components of the bond graph. Each one is
summarized as a Hill-order formula, and identical formulas are counted.
Everything here is a pure function of (elements, bonds).
"""
from collections import Counter, deque
from typing import Dict, Iterable, List, Sequence

from nanoreactor.core.schemas import Bond, Species


def connected_components(n_atoms: int, bonds: Iterable[Bond]) -> List[List[int]]:
    """
    Group atoms into molecules by breadth-first search.

    Components are discovered from the lowest unvisited atom index
    upward; isolated atoms form single-atom components.

    Args:
        n_atoms: Number of atoms.
        bonds: Bonds with endpoints in [0, n_atoms).

    Returns:
        List of components, each a list of atom indices in visit order.
    """
    adjacency: List[List[int]] = [[] for _ in range(n_atoms)]
    for bond in bonds:
        adjacency[bond.i].append(bond.j)
        adjacency[bond.j].append(bond.i)

    visited = [False] * n_atoms
    components = []
    for start in range(n_atoms):
        if visited[start]:
            continue
        visited[start] = True
        component = []
        queue = deque([start])
        while queue:
            atom = queue.popleft()
            component.append(atom)
            for neighbor in adjacency[atom]:
                if not visited[neighbor]:
                    visited[neighbor] = True
                    queue.append(neighbor)
        components.append(component)
    return components


def hill_formula(symbols: Iterable[str]) -> str:
    """
    Build a formula in Hill order.

    With carbon present: C first, H second, the rest alphabetical.
    Without carbon: every element alphabetical. Counts of 1 are omitted.

    Example:
        >>> hill_formula(['O', 'H', 'H'])
        'H2O'
        >>> hill_formula(['H', 'C', 'H', 'H', 'H'])
        'CH4'
    """
    counts: Dict[str, int] = Counter(symbols)
    if "C" in counts:
        order = ["C"] + (["H"] if "H" in counts else [])
        order += sorted(s for s in counts if s not in ("C", "H"))
    else:
        order = sorted(counts)
    return "".join(s if counts[s] == 1 else f"{s}{counts[s]}" for s in order)


def detect_species(elements: Sequence[str], bonds: Iterable[Bond]) -> List[Species]:
    """
    Count molecular species.

    Args:
        elements: Element symbol per atom.
        bonds: Current bonds.

    Returns:
        Species sorted by count descending; ties keep first-seen order.

    Example:
        >>> detect_species(['H', 'H'], [Bond(0, 1, 1, 0.74)])
        [Species(formula='H2', count=1)]
    """
    counts: Dict[str, int] = {}
    for component in connected_components(len(elements), bonds):
        formula = hill_formula(elements[k] for k in component)
        counts[formula] = counts.get(formula, 0) + 1

    # sorted() is stable, so equal counts stay in insertion order
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    return [Species(formula=f, count=c) for f, c in ranked]
