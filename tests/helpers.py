TRIANGLE = [(0.0, -100.0), (-87.0, 50.0), (87.0, 50.0)]
TRIANGLE_EDGES = [(0, 1), (1, 2), (2, 0)]


def ids_of(g, indices):
    return [g.vertices[i].getId() for i in indices]


def rotations(seq):
    seq = list(seq)
    return [seq[i:] + seq[:i] for i in range(len(seq))]


def structural(g):
    """Snapshot without the transient selection/segment lists."""
    return g.snapshot()[:3]
