import weakref

from Nodes.R_entry import BranchEntry
from Nodes.R_tree.Geometry_Utils import union_all
from Nodes.R_tree.Rectangle_R import EMPTY


class R_node:
    """
    Nodo del R*-Tree. Una hoja guarda solo DataEntry y un nodo interno solo
    BranchEntry. El nivel 0 es el de las hojas y crece hacia la raíz.

    El MBR del nodo se mantiene siempre igual a la unión exacta de sus entradas.
    La referencia al padre es débil: el dueño del nodo es la entrada de su padre.
    """

    def __init__(self, leaf=False, level=0, parent=None, entries=None):
        self.leaf = leaf
        self.level = level
        self._parent = None
        self.parent = parent
        self._entries = []
        self.mbr = EMPTY
        for e in entries or ():
            self.add_entry(e)

    def __repr__(self):
        kind = "hoja" if self.leaf else "interno"
        return f"R_node({kind}, nivel={self.level}, entradas={len(self._entries)})"

    def __len__(self):
        return len(self._entries)

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node):
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def entries(self):
        return tuple(self._entries)

    def add_entry(self, entry):
        self._entries.append(entry)
        # con una sola entrada nueva basta con ampliar el MBR actual
        if len(self._entries) == 1:
            self.mbr = entry.boundary
        else:
            self.mbr = self.mbr.enlarge_to_contain(entry.boundary)

    def remove_entry(self, entry):
        for i, e in enumerate(self._entries):
            if e is entry:
                del self._entries[i]
                self.recalc_mbr()
                return True
        return False

    def replace_entry(self, old, new):
        """ Sustituye una entrada conservando su posición """
        for i, e in enumerate(self._entries):
            if e is old:
                self._entries[i] = new
                self.recalc_mbr()
                return True
        return False

    def clear(self):
        self._entries.clear()
        self.mbr = EMPTY

    def recalc_mbr(self):
        self.mbr = union_all(e.boundary for e in self._entries)

    def branch_for(self, child):
        """ Entrada de este nodo que apunta a `child`, o None """
        for e in self._entries:
            if isinstance(e, BranchEntry) and e.child is child:
                return e
        return None
