import logging

from PyQt6.QtCore import QThread, pyqtSignal

from knowmap.graph_engine import GraphEngine

logger = logging.getLogger(__name__)


class LayoutWorker(QThread):
    """Runs a layout off the GUI thread.

    The nodes belong to the worker until ``finished`` or ``cancelled`` is
    emitted; the caller must not touch them in between.
    """
    finished = pyqtSignal(list)
    cancelled = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, nodes, edges, width, height, config=None, rng=None):
        super().__init__()
        self.nodes = nodes
        self.edges = edges
        self.width = width
        self.height = height
        self.engine = GraphEngine(config)
        self.rng = rng
        self._stop_requested = False

    def cancel(self):
        # Checked once per iteration
        self._stop_requested = True

    def run(self):
        try:
            stopped = self.engine.simulate(self.nodes, self.edges, self.width, self.height,
                                           rng=self.rng, should_stop=lambda: self._stop_requested)
        except Exception as e:
            logger.error(f"Layout failed: {e}")
            self.error.emit(str(e))
            return

        if stopped:
            self.cancelled.emit()
        else:
            self.finished.emit(self.nodes)
