import math

import pyqtgraph as pg
from PySide6.QtWidgets import QVBoxLayout, QWidget

from src.wallet_core.analytics.journal import (
    EXPENSE_COLOR,
    INCOME_COLOR,
    ChartSeries,
    FlowSummary,
    format_n0,
)

# Set pyqtgraph options for better performance and appearance
pg.setConfigOptions(antialias=True, background="w", foreground="k")

AREA_FILL = (135, 206, 250)  # light sky blue
AREA_BORDER = (0, 0, 255)
GRID_COLOR = (192, 192, 192)  # silver
PIXEL_POINT_WIDTH = 5
SUMMARY_BAR_WIDTH = 0.6


def _tooltip(x, y, data):
    return str(data)


class N0AxisItem(pg.AxisItem):
    """Axis with thousands-separated integer labels (e.g. 1,250,000)."""

    def __init__(self, orientation, **kwargs):
        super().__init__(orientation, **kwargs)
        self.enableAutoSIPrefix(False)

    def tickStrings(self, values, scale, spacing):  # noqa: N802 - Qt override
        return [format_n0(value * scale) for value in values]


def _configure_plot(plot: pg.PlotItem):
    plot.showGrid(x=True, y=True, alpha=1.0)
    # Grid lines are drawn with the tick pen; axis line and labels keep the foreground.
    for name in ("bottom", "left"):
        plot.getAxis(name).setTickPen(pg.mkPen(GRID_COLOR))
    plot.getViewBox().setMouseEnabled(y=False)


class BalanceChartWidget(QWidget):
    """Area chart of the wallet balance over time."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.plot_widget = pg.PlotWidget(
            axisItems={"bottom": pg.DateAxisItem(), "left": N0AxisItem("left")}
        )
        self.layout.addWidget(self.plot_widget)
        self._setup_plots()

    def _setup_plots(self):
        self.balance_plot = self.plot_widget.getPlotItem()
        _configure_plot(self.balance_plot)
        self.balance_plot.setLabel("left", "Balance (ISK)")

        self.area_item = self.balance_plot.plot(
            pen=pg.mkPen(AREA_BORDER, width=1),
            fillLevel=0,
            brush=pg.mkBrush(AREA_FILL),
        )
        self.marker_item = pg.ScatterPlotItem(
            symbol="d", size=6, pen=None, brush=pg.mkBrush("k"),
            hoverable=True, tip=_tooltip,
        )
        self.balance_plot.addItem(self.marker_item)

    def set_series(self, series: ChartSeries):
        """Replaces all points with the given balance series."""
        if not len(series):
            self.clear_chart()
            return
        self.area_item.setData(x=series.x, y=series.y)
        self.marker_item.setData(x=series.x, y=series.y, data=series.tooltips)
        self.balance_plot.enableAutoRange()

    def clear_chart(self):
        self.area_item.clear()
        self.marker_item.clear()


class AmountChartWidget(QWidget):
    """Per-transaction income/expense columns above an inflow/outflow summary."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.layout = QVBoxLayout(self)
        self.layout_widget = pg.GraphicsLayoutWidget()
        self.layout.addWidget(self.layout_widget)
        self._setup_plots()

    def _setup_plots(self):
        self.amount_plot = self.layout_widget.addPlot(
            row=0, col=0,
            axisItems={"bottom": pg.DateAxisItem(), "left": N0AxisItem("left")},
        )
        _configure_plot(self.amount_plot)
        self.amount_plot.setLabel("left", "Amount (ISK)")
        self.amount_bars = None
        self.amount_tips = pg.ScatterPlotItem(
            size=8, pen=None, brush=pg.mkBrush(0, 0, 0, 0),
            hoverable=True, tip=_tooltip,
        )
        self.amount_plot.addItem(self.amount_tips)
        self.amount_plot.addLine(y=0, pen=pg.mkPen("k"))

        # Columns keep a fixed on-screen width however far the user zooms.
        view_box = self.amount_plot.getViewBox()
        view_box.sigXRangeChanged.connect(self._update_bar_width)
        view_box.sigResized.connect(self._update_bar_width)

        self.summary_plot = self.layout_widget.addPlot(
            row=1, col=0, axisItems={"left": N0AxisItem("left")}
        )
        _configure_plot(self.summary_plot)
        self.summary_plot.hideAxis("bottom")
        self.summary_plot.setXRange(-1, 1)
        self.summary_bars = None
        self.summary_tips = pg.ScatterPlotItem(
            size=12, pen=None, brush=pg.mkBrush(0, 0, 0, 0),
            hoverable=True, tip=_tooltip,
        )
        self.summary_plot.addItem(self.summary_tips)
        self.layout_widget.ci.layout.setRowStretchFactor(0, 3)

    def _bar_width(self) -> float:
        view_box = self.amount_plot.getViewBox()
        (x_min, x_max), _ = view_box.viewRange()
        if view_box.width() <= 0 or not math.isfinite(x_max - x_min):
            return 1.0
        return (x_max - x_min) / view_box.width() * PIXEL_POINT_WIDTH

    def _update_bar_width(self, *args):
        if self.amount_bars is not None:
            self.amount_bars.setOpts(width=self._bar_width())

    def set_data(self, amounts: ChartSeries, summary: FlowSummary):
        """(Re)draws the per-transaction columns and the summary columns."""
        self._remove_bars()
        if len(amounts):
            self.amount_bars = pg.BarGraphItem(
                x=amounts.x,
                height=amounts.y,
                width=self._bar_width(),
                brushes=[pg.mkBrush(color) for color in amounts.brushes],
                pens=[pg.mkPen(color) for color in amounts.brushes],
            )
            self.amount_plot.addItem(self.amount_bars)
            self.amount_plot.enableAutoRange()
        self.amount_tips.setData(x=amounts.x, y=amounts.y, data=amounts.tooltips)

        inflow = float(summary.inflow)
        outflow = float(summary.outflow)
        self.summary_bars = pg.BarGraphItem(
            x=[0, 0],
            height=[inflow, outflow],
            width=SUMMARY_BAR_WIDTH,
            brushes=[pg.mkBrush(INCOME_COLOR), pg.mkBrush(EXPENSE_COLOR)],
            pens=[pg.mkPen(INCOME_COLOR), pg.mkPen(EXPENSE_COLOR)],
        )
        self.summary_plot.addItem(self.summary_bars)
        self.summary_tips.setData(
            x=[0, 0],
            y=[inflow, outflow],
            data=[summary.inflow_tooltip, summary.outflow_tooltip],
        )
        self.summary_plot.enableAutoRange(axis="y")

    def _remove_bars(self):
        if self.amount_bars is not None:
            self.amount_plot.removeItem(self.amount_bars)
            self.amount_bars = None
        if self.summary_bars is not None:
            self.summary_plot.removeItem(self.summary_bars)
            self.summary_bars = None

    def clear_chart(self):
        self._remove_bars()
        self.amount_tips.clear()
        self.summary_tips.clear()
