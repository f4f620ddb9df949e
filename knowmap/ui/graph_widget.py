from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QFont

from knowmap.rendering import LEGEND, NODE_COLORS, NODE_RADIUS, edge_segments, truncate_label


class GraphWidget(QWidget):
    """Draws a laid-out knowledge graph in canvas coordinates.

    The widget uses the same width/height the layout ran with, so one canvas
    unit is one pixel.
    """

    def __init__(self, width=800, height=600, parent=None):
        super().__init__(parent)
        self.nodes = []
        self.edges = []

        # Rendering settings
        self.node_radius = NODE_RADIUS
        self.edge_color = QColor("#64748b")
        self.edge_color.setAlphaF(0.5)
        self.text_color = QColor("#d4d4d4")
        self.bg_color = QColor("#121212")

        self.setFixedSize(int(width), int(height))

    def set_graph(self, nodes, edges):
        self.nodes = list(nodes)
        self.edges = list(edges)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Fill Background
        painter.fillRect(self.rect(), self.bg_color)

        if not self.nodes:
            painter.setPen(self.text_color)
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No data")
            return

        # Draw Edges
        painter.setPen(QPen(self.edge_color, 1.5))
        for x1, y1, x2, y2 in edge_segments(self.nodes, self.edges):
            painter.drawLine(QPointF(x1, y1), QPointF(x2, y2))

        # Draw Nodes
        font = QFont("Segoe UI", 8)
        painter.setFont(font)
        r = self.node_radius

        for node in self.nodes:
            color = QColor(NODE_COLORS[node.category])
            painter.setPen(QPen(color, 1.5))
            fill = QColor(color)
            fill.setAlphaF(0.85)
            painter.setBrush(QBrush(fill))
            painter.drawEllipse(QRectF(node.x - r, node.y - r, r * 2, r * 2))

            # Label below the circle
            painter.setPen(self.text_color)
            painter.drawText(QRectF(node.x - 70, node.y + r + 2, 140, 16),
                             Qt.AlignmentFlag.AlignCenter, truncate_label(node.label))

        self._draw_legend(painter)

    def _draw_legend(self, painter):
        x = 12
        y = self.height() - 20
        painter.setPen(Qt.PenStyle.NoPen)
        for category, text in LEGEND:
            painter.setBrush(QBrush(QColor(NODE_COLORS[category])))
            painter.drawEllipse(QRectF(x, y - 6, 12, 12))
            painter.setPen(self.text_color)
            painter.drawText(QPointF(x + 16, y + 4), text)
            painter.setPen(Qt.PenStyle.NoPen)
            x += 110
