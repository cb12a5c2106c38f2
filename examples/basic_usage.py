"""Basic usage example for neighborgraph."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


from neighborgraph import (
    Direction,
    Edge,
    InMemoryGraph,
    group_reduce_on_neighbors,
    initial_neighbor_set,
    recommend,
    reduce_on_neighbors,
    union_neighbor_sets,
)


def main():
    print("=" * 60)
    print("neighborgraph - Basic Usage Example")
    print("=" * 60)

    # 1. Build a graph from an edge list
    print("\n1. Building graph...")
    pairs = [("A", "B"), ("A", "C"), ("B", "D"), ("C", "D"), ("B", "E"), ("C", "E")]
    edges = [Edge(source_id=s, target_id=t) for s, t in pairs]
    graph = InMemoryGraph.from_edges(edges, initial_neighbor_set)
    print(f"   {graph}")

    # 2. Reduce neighbor values into neighbor sets
    print("\n2. Neighbor sets (self + one hop)...")
    for vid, neighbors in reduce_on_neighbors(graph, union_neighbor_sets).items():
        print(f"   {vid}: {sorted(neighbors)}")

    # 3. A custom group function: degree per vertex
    print("\n3. Degrees via group_reduce_on_neighbors...")
    degrees = group_reduce_on_neighbors(
        graph,
        lambda vertex, pairs: [(vertex.vertex_id, len(pairs))],
        direction=Direction.ALL,
    )
    for vid, degree in degrees:
        print(f"   {vid}: {degree}")

    # 4. People you might know
    print("\n4. Recommendations (threshold=1)...")
    for rec in recommend(graph, threshold=1):
        print(f"   {rec.source_id} -> {rec.candidate_id} ({rec.path_count} paths)")

    print("\n" + "=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
