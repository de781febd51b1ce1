import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle as RectPatch


def plot_tree(tree, fig=None):
    """ Dibuja el MBR de cada nodo del árbol (raíz incluida) sin relleno """
    if fig is None:
        fig = Figure(figsize=(6, 6))
    ax = fig.add_subplot(1, 1, 1)

    boundaries = tree.all_boundaries()
    for r in boundaries:
        ax.add_patch(RectPatch((r.xmin, r.ymin), r.width, r.height, fill=False, linewidth=0.8))

    if boundaries:
        root = boundaries[0]
        pad = max(root.width, root.height) * 0.05 or 1.0
        ax.set_xlim(root.xmin - pad, root.xmax + pad)
        ax.set_ylim(root.ymin - pad, root.ymax + pad)
    ax.set_aspect('equal')
    ax.set_title(f'R*-Tree: {len(boundaries)} nodos, altura {tree.height}')
    return fig


def plot_benchmark(results, fig=None):
    """ Barras de factor de carga y tiempo de inserción por tamaño """
    if fig is None:
        fig = Figure(figsize=(5, 4))

    x = np.arange(len(results['sizes']))
    labels = [str(s) for s in results['sizes']]

    ax1 = fig.add_subplot(2, 1, 1)
    ax1.bar(x, results['load_factors'], 0.4, label='R*-Tree LF')
    ax1.set_xticks(x)
    ax1.set_xticklabels(labels)
    ax1.set_ylabel('Factor de Carga')
    ax1.legend()

    ax2 = fig.add_subplot(2, 1, 2)
    ax2.bar(x, results['times'], 0.4, label='R*-Tree time')
    ax2.set_xticks(x)
    ax2.set_xticklabels(labels)
    ax2.set_xlabel('N (nº de inserciones)')
    ax2.set_ylabel('Tiempo (s)')
    ax2.legend()

    return fig
