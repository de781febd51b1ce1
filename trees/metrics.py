import argparse
import gc
import logging
import time
import tracemalloc

import numpy as np

from Nodes.R_entry import BranchEntry
from Nodes.R_tree.Rectangle_R import Rectangle
from trees.R_tree import RStarTree
from trees.log import setup_logging
from trees.plotting import plot_benchmark

logger = logging.getLogger(__name__)


def _walk(node):
    yield node
    for entry in node.entries:
        if isinstance(entry, BranchEntry):
            yield from _walk(entry.child)


def _get_rtree_leaf_stats(root):
    # devuelve (num_leaves, total_entries, list_entries_per_leaf)
    leaves = [len(node) for node in _walk(root) if node.leaf]
    if not leaves:
        return 0, 0, []
    return len(leaves), sum(leaves), leaves


def _sibling_overlap(node):
    """ Suma del área de intersección entre cada par de entradas del nodo """
    boundaries = [e.boundary for e in node.entries]
    total = 0.0
    for i in range(len(boundaries)):
        for j in range(i + 1, len(boundaries)):
            total += boundaries[i].intersection_area(boundaries[j])
    return total


def tree_statistics(tree: RStarTree) -> dict:
    """Medidas de calidad de la estructura: ocupación, solapamiento y margen."""
    nodes = list(_walk(tree.root))
    leaves = np.array([len(n) for n in nodes if n.leaf], dtype=float)
    internal = [n for n in nodes if not n.leaf]

    avg_ent = float(leaves.mean()) if leaves.size else 0.0
    return {
        'height': tree.height,
        'nodes': len(nodes),
        'leaves': int(leaves.size),
        'entries': int(leaves.sum()),
        'avg_entries_per_leaf': avg_ent,
        'load_factor': avg_ent / tree.max_entries,
        'total_overlap': float(np.sum([_sibling_overlap(n) for n in internal])),
        'total_margin': float(np.sum([n.mbr.margin() for n in nodes])),
    }


def _random_rectangles(rng, n, rect_size, center):
    # distribuir aleatoriamente alrededor del centro
    cx, cy = center
    xs = cx + (rng.random(n) - 0.5) * 0.1
    ys = cy + (rng.random(n) - 0.5) * 0.1
    return [Rectangle(x, y, x + rect_size, y + rect_size) for x, y in zip(xs, ys)]


def benchmark_rstar(sizes, max_entries=4, min_entries=1, rect_size=0.001,
                    center=(6.24, -75.58), seed=None):
    """Inserta rectángulos pequeños alrededor del centro y devuelve métricas.
    Retorna dict con sizes, times, query_times, mem_peaks, load_factors,
    avg_entries, num_leaves, heights
    """
    sizes = list(sizes)
    rng = np.random.default_rng(seed)
    results = {key: [] for key in (
        'times', 'query_times', 'mem_peaks', 'load_factors',
        'avg_entries', 'num_leaves', 'heights')}
    results['sizes'] = sizes

    for n in sizes:
        rects = _random_rectangles(rng, n, rect_size, center)
        queries = _random_rectangles(rng, max(1, n // 10), rect_size * 10, center)

        gc.collect()
        tracemalloc.start()
        start = time.perf_counter()

        tree = RStarTree(max_entries=max_entries, min_entries=min_entries)
        for i, r in enumerate(rects):
            tree.insert({"id": i}, r)

        elapsed = time.perf_counter() - start
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        start = time.perf_counter()
        for q in queries:
            tree.search(q)
        query_elapsed = time.perf_counter() - start

        num_leaves, total_entries, _ = _get_rtree_leaf_stats(tree.root)
        avg_ent = (total_entries / num_leaves) if num_leaves > 0 else 0

        results['times'].append(elapsed)
        results['query_times'].append(query_elapsed)
        results['mem_peaks'].append(peak)
        results['load_factors'].append(avg_ent / max_entries)
        results['avg_entries'].append(avg_ent)
        results['num_leaves'].append(num_leaves)
        results['heights'].append(tree.height)
        logger.info("N=%d: inserción %.4fs, consultas %.4fs, altura %d",
                    n, elapsed, query_elapsed, tree.height)

    return results


def analyze_rtree_instance(tree: RStarTree) -> dict:
    """Analiza un RStarTree existente y devuelve métricas similares a benchmark_rstar para un único tamaño."""
    gc.collect()
    tracemalloc.start()
    start = time.perf_counter()

    stats = tree_statistics(tree)

    elapsed = time.perf_counter() - start
    _, peak = tracemalloc.get_traced_memory()
    tracemalloc.stop()

    return {
        'sizes': [stats['entries']],
        'times': [elapsed],
        'mem_peaks': [peak],
        'load_factors': [stats['load_factor']],
        'avg_entries': [stats['avg_entries_per_leaf']],
        'num_leaves': [stats['leaves']],
        'heights': [stats['height']],
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark de inserción y consulta del R*-Tree")
    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 500, 2000])
    parser.add_argument("--max-entries", type=int, default=4)
    parser.add_argument("--min-entries", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--plot", default=None, help="Ruta donde guardar la figura")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    res = benchmark_rstar(args.sizes, max_entries=args.max_entries,
                          min_entries=args.min_entries, seed=args.seed)
    for s, t, q, m, lf in zip(res['sizes'], res['times'], res['query_times'],
                              res['mem_peaks'], res['load_factors']):
        print(f"N={s}: time={t:.4f}s, query={q:.4f}s, mem_peak={m/1024:.1f} KiB, load_factor={lf:.3f}")

    if args.plot:
        plot_benchmark(res).savefig(args.plot)
    return res


if __name__ == "__main__":
    main()
