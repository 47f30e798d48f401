from typing import Sequence
import pyqtgraph as pg


def setup_wpm_plot(plot_widget: pg.PlotWidget, line_color: str, compact: bool = False):
    """Style a plot for per-second WPM samples and return its (empty) curve.

    ``compact`` hides both axes for an inline sparkline.
    """
    plot_widget.setBackground(None)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setClipToView(True)
    if compact:
        plot_widget.hideAxis("left")
        plot_widget.hideAxis("bottom")
    else:
        plot_widget.showGrid(x=False, y=True, alpha=0.15)
        plot_widget.setLabel("left", "WPM")
        plot_widget.setLabel("bottom", "Time (s)")
    curve = plot_widget.plot([], [], pen=pg.mkPen(line_color, width=2.5), antialias=True)
    return curve


def update_curve(curve, history: Sequence[int]):
    # sample i covers second i+1 of the session
    x = list(range(1, len(history) + 1))
    curve.setData(x, [float(v) for v in history])
