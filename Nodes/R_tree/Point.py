from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """ Punto inmutable del plano (x, y) """
    x: float
    y: float
