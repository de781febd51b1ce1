from dataclasses import dataclass

from Nodes.R_tree.Point import Point


@dataclass(frozen=True)
class Rectangle:
    """
    Rectángulo alineado a los ejes (MBR), inmutable.

    Se guarda por sus límites (xmin, ymin, xmax, ymax); la esquina superior
    izquierda es (xmin, ymin) y la inferior derecha (xmax, ymax).
    Un rectángulo de ancho y alto 0 es el "vacío" y actúa como neutro de la unión.
    """
    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        if self.xmax < self.xmin or self.ymax < self.ymin:
            raise ValueError(
                f"Rectángulo inválido: ({self.xmin}, {self.ymin}, {self.xmax}, {self.ymax})"
            )

    @classmethod
    def from_corner(cls, corner, width, height):
        """ Construye desde la esquina superior izquierda y sus dimensiones """
        if width < 0 or height < 0:
            raise ValueError(f"Ancho y alto no pueden ser negativos: {width}, {height}")
        return cls(corner.x, corner.y, corner.x + width, corner.y + height)

    @classmethod
    def of_point(cls, point, size=0.001):
        """ Cuadrado de lado `size` centrado en el punto """
        half = size / 2.0
        return cls(point.x - half, point.y - half, point.x + half, point.y + half)

    @staticmethod
    def bounding(rectangles):
        rectangles = list(rectangles)
        if not rectangles:
            raise ValueError("Se requiere al menos un rectángulo para calcular la unión")
        result = rectangles[0]
        for r in rectangles[1:]:
            result = result.enlarge_to_contain(r)
        return result

    # --- propiedades derivadas ---
    @property
    def width(self):
        return self.xmax - self.xmin

    @property
    def height(self):
        return self.ymax - self.ymin

    @property
    def left_upper_corner(self):
        return Point(self.xmin, self.ymin)

    @property
    def right_lower_corner(self):
        return Point(self.xmax, self.ymax)

    @property
    def center(self):
        return Point((self.xmin + self.xmax) / 2.0, (self.ymin + self.ymax) / 2.0)

    @property
    def is_empty(self):
        return self.width == 0 and self.height == 0

    # --- medidas ---
    def area(self):
        return self.width * self.height

    def margin(self):
        """ Perímetro """
        return 2 * (self.width + self.height)

    # --- predicados (bordes inclusivos) ---
    def contains(self, other):
        if isinstance(other, Point):
            return (self.xmin <= other.x <= self.xmax and
                    self.ymin <= other.y <= self.ymax)
        return (self.xmin <= other.xmin and
                self.xmax >= other.xmax and
                self.ymin <= other.ymin and
                self.ymax >= other.ymax)

    def intersects(self, other):
        return not (self.xmax < other.xmin or
                    self.xmin > other.xmax or
                    self.ymax < other.ymin or
                    self.ymin > other.ymax)

    # --- operaciones ---
    def union(self, other):
        # el vacío no aporta nada: se devuelve el otro tal cual
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        return Rectangle(min(self.xmin, other.xmin),
                         min(self.ymin, other.ymin),
                         max(self.xmax, other.xmax),
                         max(self.ymax, other.ymax))

    def enlarge_to_contain(self, other):
        """ Envolvente estricta: a diferencia de union, un rectángulo degenerado también cuenta """
        return Rectangle(min(self.xmin, other.xmin),
                         min(self.ymin, other.ymin),
                         max(self.xmax, other.xmax),
                         max(self.ymax, other.ymax))

    def enlargement_area(self, other):
        return self.union(other).area() - self.area()

    def intersection_area(self, other):
        dx = max(0.0, min(self.xmax, other.xmax) - max(self.xmin, other.xmin))
        dy = max(0.0, min(self.ymax, other.ymax) - max(self.ymin, other.ymin))
        return dx * dy

    def distance_squared_to_center(self, other):
        """ Distancia al cuadrado entre los centros de ambos rectángulos """
        c1, c2 = self.center, other.center
        dx = c1.x - c2.x
        dy = c1.y - c2.y
        return dx * dx + dy * dy


EMPTY = Rectangle(0.0, 0.0, 0.0, 0.0)
UNIT_SQUARE = Rectangle(0.0, 0.0, 1.0, 1.0)
