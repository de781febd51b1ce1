import logging

from Nodes.R_entry import BranchEntry, DataEntry, target_level
from Nodes.R_node import R_node
from Nodes.R_tree.Geometry_Utils import (
    AXES, distributions, group_mbr, overlap_increase, sort_entries,
)
from Nodes.R_tree.Point import Point
from Nodes.R_tree.Rectangle_R import Rectangle
from trees.errors import ConfigurationError

logger = logging.getLogger(__name__)


class RStarTree:
    """
    R*-Tree bidimensional (Beckmann et al., 1990).

    Guarda datos arbitrarios asociados a un MBR y responde consultas por
    intersección con un rectángulo o un punto. Al desbordarse un nodo se
    intenta primero la reinserción forzada (una vez por nivel y operación)
    y si no, se divide eligiendo eje por margen y corte por solapamiento.

    No es seguro para escrituras concurrentes: insert/remove modifican los
    nodos en sitio.
    """

    def __init__(self, max_entries=5, min_entries=1, p_reinsert=None):
        if p_reinsert is None:
            p_reinsert = max(1, int(0.35 * max_entries))

        if min_entries < 1:
            raise ConfigurationError("La capacidad mínima debe ser al menos 1")
        if max_entries < min_entries:
            raise ConfigurationError("La capacidad máxima debe ser mayor o igual a la mínima")
        if min_entries > max_entries / 2:
            raise ConfigurationError("La capacidad mínima debe ser a lo sumo la máxima / 2")
        if not 1 <= p_reinsert <= max_entries + 1 - min_entries:
            raise ConfigurationError(
                f"p_reinsert debe estar entre 1 y {max_entries + 1 - min_entries}, no {p_reinsert}"
            )

        self.max_entries = max_entries
        self.min_entries = min_entries
        self.p_reinsert = p_reinsert
        self.root = R_node(leaf=True, level=0)
        self.height = 0
        self._size = 0

    def __len__(self):
        return self._size

    # -------------------------------------------
    #     OPERACIONES PÚBLICAS
    # -------------------------------------------
    def insert(self, value, boundary):
        entry = DataEntry(boundary, value)
        self._size += 1
        if self.root.leaf and not len(self.root):
            self.root.add_entry(entry)
            return

        # niveles ya reinsertados durante ESTA inserción
        reinserted_levels = set()
        self._insert_recursive(self.root, entry, 0, reinserted_levels)

    def remove(self, value, boundary):
        """ Elimina la entrada con exactamente ese MBR y ese dato. False si no existe. """
        found = self._find_leaf(self.root, value, boundary)
        if found is None:
            return False

        leaf, entry = found
        leaf.remove_entry(entry)
        self._size -= 1
        self._condense_tree(leaf)
        return True

    def search(self, query):
        """ Datos cuyo MBR intersecta el rectángulo (o el punto) consultado """
        if isinstance(query, Point):
            query = Rectangle.of_point(query)
        elif not isinstance(query, Rectangle):
            raise TypeError(f"Se esperaba Rectangle o Point, no {type(query).__name__}")

        results = []
        self._search_node(self.root, query, results)
        return results

    def search_k_nearest(self, query, k):
        raise NotImplementedError("La búsqueda de los k vecinos más cercanos no está implementada")

    def all_boundaries(self):
        """ MBR de todos los nodos, raíz primero (solo para depuración y dibujo) """
        mbrs = []
        self._collect_mbrs(self.root, mbrs)
        return mbrs

    # -------------------------------------------
    #     BÚSQUEDA
    # -------------------------------------------
    def _search_node(self, node, query, results):
        if not node.mbr.intersects(query):
            return
        for entry in node.entries:
            if not entry.boundary.intersects(query):
                continue
            if isinstance(entry, DataEntry):
                results.append(entry.payload)
            else:
                self._search_node(entry.child, query, results)

    def _find_leaf(self, node, value, boundary):
        if node.leaf:
            for entry in node.entries:
                if entry.boundary == boundary and entry.payload == value:
                    return node, entry
            return None

        for entry in node.entries:
            if entry.boundary.intersects(boundary):
                found = self._find_leaf(entry.child, value, boundary)
                if found is not None:
                    return found
        return None

    def _collect_mbrs(self, node, mbrs):
        mbrs.append(node.mbr)
        for entry in node.entries:
            if isinstance(entry, BranchEntry):
                self._collect_mbrs(entry.child, mbrs)

    # -------------------------------------------
    #     INSERCIÓN
    # -------------------------------------------
    def _insert_recursive(self, node, entry, level, reinserted_levels):
        if node.level == level:
            if isinstance(entry, BranchEntry):
                entry.child.parent = node
            node.add_entry(entry)

            if len(node) > self.max_entries:
                self._overflow_treatment(node, reinserted_levels)
            else:
                # sin división, pero los MBR de los ancestros pueden crecer
                self._adjust_tree(node, None, reinserted_levels)
        else:
            assert not node.leaf, "Se llegó a una hoja antes del nivel destino"
            child = self._choose_subtree(node, entry.boundary)
            self._insert_recursive(child, entry, level, reinserted_levels)

    def _choose_subtree(self, node, rect):
        """
        Hijo de `node` donde debe ir `rect`. No modifica el árbol.

        Si los hijos son hojas se minimiza el aumento de solapamiento con los
        hermanos (desempate: aumento de área, luego área). Si no, el criterio
        clásico del R-Tree: aumento de área, luego área.
        """
        if node.leaf or not len(node):
            return node

        entries = node.entries
        best = None
        best_key = None

        if entries[0].child.leaf:
            for e in entries:
                others = [o.boundary for o in entries if o is not e]
                key = (overlap_increase(e.boundary, others, rect),
                       e.boundary.enlargement_area(rect),
                       e.boundary.area())
                # estricto: ante empate gana el primero
                if best_key is None or key < best_key:
                    best, best_key = e, key
        else:
            for e in entries:
                key = (e.boundary.enlargement_area(rect), e.boundary.area())
                if best_key is None or key < best_key:
                    best, best_key = e, key

        return best.child

    def _overflow_treatment(self, node, reinserted_levels):
        if node is not self.root and node.level not in reinserted_levels:
            reinserted_levels.add(node.level)
            self._reinsert(node, reinserted_levels)
            return

        node, sibling = self._split_node(node)
        self._adjust_tree(node, sibling, reinserted_levels)

    def _reinsert(self, node, reinserted_levels):
        """ Saca las p entradas más lejanas del centro del nodo y las vuelve a insertar desde la raíz """
        node_mbr = node.mbr
        ordered = sorted(node.entries,
                         key=lambda e: e.boundary.distance_squared_to_center(node_mbr),
                         reverse=True)
        removed = ordered[:self.p_reinsert]
        remaining = ordered[self.p_reinsert:]

        node.clear()
        for e in remaining:
            node.add_entry(e)
        logger.debug("Reinserción forzada en nivel %d: %d entradas", node.level, len(removed))

        # el nodo encogió: los ancestros deben reflejarlo antes de reinsertar
        self._adjust_tree(node, None, reinserted_levels)

        for e in removed:
            self._insert_recursive(self.root, e, target_level(e), reinserted_levels)

    # -------------------------------------------
    #     DIVISIÓN
    # -------------------------------------------
    def _split_node(self, node):
        axis = self._choose_split_axis(node)
        split_index, ordered = self._choose_split_index(node, axis)
        group1 = ordered[:split_index]
        group2 = ordered[split_index:]

        node.clear()
        for e in group1:
            node.add_entry(e)

        sibling = R_node(leaf=node.leaf, level=node.level, parent=node.parent, entries=group2)

        if not node.leaf:
            for e in group1:
                e.child.parent = node
            for e in group2:
                e.child.parent = sibling

        logger.debug("División en nivel %d (eje %d): %d / %d entradas",
                     node.level, axis, len(group1), len(group2))
        return node, sibling

    def _choose_split_axis(self, node):
        """ Eje (0 = x, 1 = y) con menor suma de márgenes sobre todas las particiones """
        best_axis = None
        min_margin = float("inf")

        for axis in AXES:
            total = 0.0
            for by_upper in (False, True):
                ordered = sort_entries(node.entries, axis, by_upper)
                total += self._margin_sum(ordered)
            if total < min_margin:
                min_margin = total
                best_axis = axis
        return best_axis

    def _margin_sum(self, ordered):
        total = 0.0
        for _, g1, g2 in distributions(ordered, self.min_entries, self.max_entries):
            total += group_mbr(g1).margin() + group_mbr(g2).margin()
        return total

    def _choose_split_index(self, node, axis):
        """ Corte con menor solapamiento entre grupos (desempate: menor área total) """
        best_index = None
        best_order = None
        best_key = None

        for by_upper in (False, True):
            ordered = sort_entries(node.entries, axis, by_upper)
            for split_index, g1, g2 in distributions(ordered, self.min_entries, self.max_entries):
                mbr1, mbr2 = group_mbr(g1), group_mbr(g2)
                key = (mbr1.intersection_area(mbr2), mbr1.area() + mbr2.area())
                if best_key is None or key < best_key:
                    best_key = key
                    best_index = split_index
                    best_order = ordered

        return best_index, best_order

    # -------------------------------------------
    #     AJUSTE HACIA LA RAÍZ
    # -------------------------------------------
    def _adjust_tree(self, node, sibling, reinserted_levels):
        current = node
        while current is not self.root:
            parent = current.parent
            if parent is None:
                break

            entry = parent.branch_for(current)
            if entry is not None:
                parent.replace_entry(entry, BranchEntry(current.mbr, current))

            if sibling is not None:
                sibling.parent = parent
                parent.add_entry(BranchEntry(sibling.mbr, sibling))

            if len(parent) > self.max_entries:
                # la división o reinserción del padre sigue ajustando por su cuenta
                self._overflow_treatment(parent, reinserted_levels)
                return

            current = parent
            sibling = None

        if sibling is not None:
            self._grow_root(sibling)

    def _grow_root(self, sibling):
        old_root = self.root
        new_root = R_node(leaf=False, level=old_root.level + 1)
        new_root.add_entry(BranchEntry(old_root.mbr, old_root))
        new_root.add_entry(BranchEntry(sibling.mbr, sibling))
        old_root.parent = new_root
        sibling.parent = new_root
        self.root = new_root
        self.height += 1
        logger.debug("Nueva raíz en nivel %d", self.height)

    # -------------------------------------------
    #     ELIMINACIÓN
    # -------------------------------------------
    def _condense_tree(self, leaf):
        assert leaf.leaf, "La condensación debe empezar en una hoja"

        current = leaf
        orphans = []
        while current is not self.root:
            parent = current.parent
            if parent is None:
                break
            entry = parent.branch_for(current)

            if len(current) < self.min_entries:
                # el nodo se descarta y sus entradas quedan huérfanas
                parent.remove_entry(entry)
                orphans.extend(current.entries)
                current.parent = None
            else:
                parent.replace_entry(entry, BranchEntry(current.mbr, current))
            current = parent

        reinserted_levels = set()
        for orphan in orphans:
            self._insert_recursive(self.root, orphan, target_level(orphan), reinserted_levels)

        while not self.root.leaf and len(self.root) == 1:
            child = self.root.entries[0].child
            child.parent = None
            self.root = child
            self.height -= 1
            logger.debug("La raíz colapsa a su único hijo; altura %d", self.height)
