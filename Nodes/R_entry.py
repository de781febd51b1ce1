from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from Nodes.R_tree.Rectangle_R import Rectangle

if TYPE_CHECKING:
    from Nodes.R_node import R_node


@dataclass(frozen=True)
class DataEntry:
    """ Entrada de hoja: el MBR del objeto y el dato asociado """
    boundary: Rectangle
    payload: Any


@dataclass(frozen=True, eq=False)
class BranchEntry:
    """
    Entrada de nodo interno: el MBR del hijo y el hijo mismo.
    La entrada es la única dueña de su nodo hijo.
    """
    boundary: Rectangle
    child: "R_node"


Entry = Union[DataEntry, BranchEntry]


def target_level(entry):
    """ Nivel del nodo que debe alojar la entrada: 0 para datos, el del padre del hijo para ramas """
    if isinstance(entry, BranchEntry):
        return entry.child.level + 1
    return 0
