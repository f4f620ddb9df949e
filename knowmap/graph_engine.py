import logging
import math
import random

from knowmap.graph_model import index_nodes, resolve_edges
from knowmap.layout_config import LayoutConfig

logger = logging.getLogger(__name__)


class GraphEngine:
    """Force-directed layout for the knowledge map.

    Every call to :meth:`layout` is a full re-layout starting from the
    positions currently on the nodes; nothing is kept between calls. The
    engine writes ``x``, ``y``, ``vx`` and ``vy`` of the nodes it is given and
    expects to be the only writer while the call runs.
    """

    def __init__(self, config=None):
        config = config or LayoutConfig()
        self.config = config

        # Physics constants
        self.repulsion = config.repulsion
        self.spring_k = config.attraction
        self.center_attraction = config.gravity
        self.damping = config.damping
        self.min_distance = config.min_distance
        self.margin = config.margin
        self.iterations = config.iterations
        self.convergence_threshold = config.convergence_threshold

    def layout(self, nodes, edges, width, height, iterations=None, rng=None, should_stop=None):
        """Positions ``nodes`` on a ``width`` x ``height`` canvas, in place.

        ``rng`` is a ``random.Random`` used for unplaced nodes. ``should_stop``
        is polled before each iteration; returning True ends the loop with
        the positions of the last finished iteration.

        Returns ``nodes``.
        """
        self.simulate(nodes, edges, width, height, iterations, rng, should_stop)
        return nodes

    def simulate(self, nodes, edges, width, height, iterations=None, rng=None, should_stop=None):
        """Same as :meth:`layout`, but returns True when ``should_stop`` ended the loop."""
        if not nodes:
            return False

        iterations = self.iterations if iterations is None else iterations
        rng = rng if rng is not None else random.Random()

        self.initialize(nodes, width, height, rng)
        springs = resolve_edges(index_nodes(nodes), edges)

        done = 0
        stopped = False
        for _ in range(iterations):
            if should_stop is not None and should_stop():
                logger.debug(f"Layout cancelled after {done} iterations")
                stopped = True
                break
            speed = self.step(nodes, springs, width, height)
            done += 1
            if self.convergence_threshold is not None and speed < self.convergence_threshold:
                logger.debug(f"Layout converged after {done} iterations (speed {speed:.4f})")
                break

        logger.debug(f"Laid out {len(nodes)} nodes, {len(springs)} springs in {done} iterations")
        return stopped

    def initialize(self, nodes, width, height, rng):
        """Random start for unplaced nodes; every node starts at rest."""
        for n in nodes:
            if n.needs_placement():
                n.x = rng.uniform(width * 0.1, width * 0.9)
                n.y = rng.uniform(height * 0.1, height * 0.9)
            n.vx = 0.0
            n.vy = 0.0

    def step(self, nodes, springs, width, height):
        """One iteration: accumulate forces, then integrate. Returns summed speed."""
        self.apply_forces(nodes, springs, width, height)
        return self.integrate(nodes, width, height)

    def apply_forces(self, nodes, springs, width, height):
        """Adds repulsion, spring and centering forces to each node's velocity.

        Mass is 1, so a force is applied directly as a velocity delta.
        """
        # 1. Repulsion (All vs All)
        # O(N^2), fine for personal-scale graphs (a few hundred nodes)
        count = len(nodes)
        for i in range(count):
            n1 = nodes[i]
            for j in range(i + 1, count):
                n2 = nodes[j]

                dx = n2.x - n1.x
                dy = n2.y - n1.y
                dist = math.sqrt(dx * dx + dy * dy)
                if dist < self.min_distance:
                    dist = self.min_distance

                # F = k / dist^2
                f = self.repulsion / (dist * dist)
                fx = (dx / dist) * f
                fy = (dy / dist) * f

                n1.vx -= fx
                n1.vy -= fy
                n2.vx += fx
                n2.vy += fy

        # 2. Spring Attraction (Edges), zero rest length
        for n1, n2 in springs:
            dx = n2.x - n1.x
            dy = n2.y - n1.y
            dist = math.sqrt(dx * dx + dy * dy)
            if dist < 1:
                continue

            f = self.spring_k * dist
            fx = (dx / dist) * f
            fy = (dy / dist) * f

            n1.vx += fx
            n1.vy += fy
            n2.vx -= fx
            n2.vy -= fy

        # 3. Center Gravity
        cx = width / 2
        cy = height / 2
        for n in nodes:
            n.vx += (cx - n.x) * self.center_attraction
            n.vy += (cy - n.y) * self.center_attraction

    def integrate(self, nodes, width, height):
        """Damps velocity, moves nodes and clamps them inside the margin."""
        lo = self.margin
        hi_x = width - self.margin
        hi_y = height - self.margin
        speed = 0.0
        for n in nodes:
            n.vx *= self.damping
            n.vy *= self.damping

            n.x += n.vx
            n.y += n.vy

            # Absorbing wall: position is clamped, velocity is left alone
            n.x = max(lo, min(hi_x, n.x))
            n.y = max(lo, min(hi_y, n.y))

            speed += abs(n.vx) + abs(n.vy)
        return speed


def compute_layout(nodes, edges, width, height, iterations=None, rng=None, seed=None,
                   config=None, copy=False, should_stop=None):
    """Convenience wrapper around :class:`GraphEngine`.

    Pass ``seed`` (or an explicit ``rng``) for reproducible placement of
    unplaced nodes. With ``copy=True`` the input nodes are left untouched
    and new nodes carrying the result are returned.
    """
    if rng is None and seed is not None:
        rng = random.Random(seed)
    if copy:
        nodes = [n.copy() for n in nodes]
    engine = GraphEngine(config)
    return engine.layout(nodes, edges, width, height,
                         iterations=iterations, rng=rng, should_stop=should_stop)
