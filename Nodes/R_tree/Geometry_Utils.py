# ================================
# Geometry Utils para R*-Tree
# Funciones puras sobre Rectangle que usa el motor del árbol
# ================================
from Nodes.R_tree.Rectangle_R import EMPTY

X_AXIS = 0
Y_AXIS = 1
AXES = (X_AXIS, Y_AXIS)


def lower_edge(rect, axis):
    return rect.xmin if axis == X_AXIS else rect.ymin


def upper_edge(rect, axis):
    return rect.xmax if axis == X_AXIS else rect.ymax


def union_all(rectangles):
    """ Envolvente de cero o más rectángulos; EMPTY si no hay ninguno """
    result = None
    for r in rectangles:
        result = r if result is None else result.enlarge_to_contain(r)
    return EMPTY if result is None else result


def overlap_with_others(rect, others):
    """ Suma del área de intersección de `rect` con cada uno de `others` """
    return sum(rect.intersection_area(o) for o in others)


def overlap_increase(rect, others, new_rect):
    """
    Aumento del solapamiento de `rect` con sus hermanos si se agranda
    para cubrir `new_rect`.
    """
    enlarged = rect.union(new_rect)
    return overlap_with_others(enlarged, others) - overlap_with_others(rect, others)


def sort_entries(entries, axis, by_upper=False):
    """ Orden estable de las entradas por el borde inferior (o superior) del eje """
    edge = upper_edge if by_upper else lower_edge
    return sorted(entries, key=lambda e: edge(e.boundary, axis))


def distributions(sorted_entries, min_entries, max_entries):
    """
    Genera las particiones válidas (indice, grupo1, grupo2) de una secuencia
    ordenada de max_entries + 1 entradas: k = 1 .. M - 2m + 2, corte en m - 1 + k.
    """
    for k in range(1, max_entries - 2 * min_entries + 3):
        split_index = min_entries - 1 + k
        yield split_index, sorted_entries[:split_index], sorted_entries[split_index:]


def group_mbr(group):
    return union_all(e.boundary for e in group)
