"""
Element registry for the reactive force field.

This module provides the fixed table of supported elements (H, C, N, O)
with the properties the engine needs (mass, radii, valence) using a
Singleton pattern.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ElementData:
    """
    Immutable data for a chemical element.

    Attributes:
        symbol: Chemical symbol (e.g., "H", "O").
        name: Full element name.
        atomic_number: Atomic number Z.
        mass: Standard atomic mass in amu.
        covalent_radius: Covalent radius in Ångströms (bond thresholds).
        vdw_radius: Van der Waals radius in Ångströms (non-bonded sigma).
        max_valence: Maximum number of simultaneous bonds in this model.
        color: CPK color for visualization as hex string.

    Example:
        >>> from nanoreactor.core.element_registry import ElementData
        >>> h = ElementData("H", "Hydrogen", 1, 1.008, 0.31, 1.2, 1, "#FFFFFF")
    """
    symbol: str
    name: str
    atomic_number: int
    mass: float
    covalent_radius: float
    vdw_radius: float
    max_valence: int
    color: str

    @property
    def visual_radius(self) -> float:
        """Sphere radius for 3D rendering (scaled covalent radius)."""
        return max(self.covalent_radius * 0.6, 0.25)


class ElementRegistry:
    """
    Registry for supported element properties (Singleton pattern).

    Elements keep a stable registration order, and each has an integer
    type index used by the vectorized kernels (H=0, C=1, N=2, O=3).

    Example:
        >>> from nanoreactor.core import elements
        >>> elements.get_mass('O')
        15.999
        >>> elements.index_of('C')
        1
        >>> 'Fe' in elements
        False
    """

    _instance: Optional["ElementRegistry"] = None
    _initialized: bool = False

    def __new__(cls) -> "ElementRegistry":
        """Singleton: Only one registry instance exists."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize element data (only once)."""
        if not ElementRegistry._initialized:
            self._elements: Dict[str, ElementData] = {}
            self._order: List[str] = []
            self._initialize_table()
            ElementRegistry._initialized = True

    def _initialize_table(self) -> None:
        """
        Populate registry with the reactive elements.

        Masses are IUPAC standard atomic weights; colors follow CPK.
        """
        elements_data = [
            ElementData("H", "Hydrogen", 1, 1.008, 0.31, 1.20, 1, "#FFFFFF"),
            ElementData("C", "Carbon", 6, 12.011, 0.77, 1.70, 4, "#505050"),
            ElementData("N", "Nitrogen", 7, 14.007, 0.75, 1.55, 3, "#3050F8"),
            ElementData("O", "Oxygen", 8, 15.999, 0.73, 1.52, 2, "#FF0D0D"),
        ]
        for element in elements_data:
            self._elements[element.symbol] = element
            self._order.append(element.symbol)

    def get_element(self, symbol: str) -> Optional[ElementData]:
        """
        Get element data by symbol.

        Args:
            symbol: Element symbol (e.g., 'H').

        Returns:
            ElementData if found, None otherwise.
        """
        return self._elements.get(symbol)

    def get_mass(self, symbol: str) -> float:
        """
        Get atomic mass by element symbol.

        Raises:
            KeyError: If element not found in registry.
        """
        return self[symbol].mass

    def index_of(self, symbol: str) -> int:
        """
        Get the type index of an element.

        Raises:
            KeyError: If element not found in registry.
        """
        if symbol not in self._elements:
            raise KeyError(f"Element '{symbol}' not found in registry")
        return self._order.index(symbol)

    def visual_radius(self, symbol: str) -> float:
        """Render radius for an element (see ElementData.visual_radius)."""
        return self[symbol].visual_radius

    def symbols(self) -> List[str]:
        """Return element symbols in type-index order."""
        return list(self._order)

    def type_indices(self, symbols: List[str]) -> NDArray[np.intp]:
        """Map a list of symbols to an (N,) array of type indices."""
        return np.array([self.index_of(s) for s in symbols], dtype=np.intp)

    def covalent_radii(self) -> NDArray[np.floating]:
        """(n_types,) covalent radii in type-index order."""
        return np.array([self._elements[s].covalent_radius for s in self._order])

    def vdw_radii(self) -> NDArray[np.floating]:
        """(n_types,) van der Waals radii in type-index order."""
        return np.array([self._elements[s].vdw_radius for s in self._order])

    def max_valences(self) -> NDArray[np.intp]:
        """(n_types,) maximum valences in type-index order."""
        return np.array(
            [self._elements[s].max_valence for s in self._order], dtype=np.intp
        )

    def __contains__(self, symbol: object) -> bool:
        """Support 'in' operator."""
        return symbol in self._elements

    def __getitem__(self, symbol: str) -> ElementData:
        """
        Support indexing: registry['H'].

        Raises:
            KeyError: If element not found.
        """
        element = self.get_element(symbol)
        if element is None:
            raise KeyError(f"Element '{symbol}' not found in registry")
        return element

    def __len__(self) -> int:
        """Return number of elements in registry."""
        return len(self._elements)


# Module-level convenience instance (Singleton)
elements = ElementRegistry()
