from __future__ import annotations

import pandas as pd

PLOT_COLORS = {
    "text_main": "#1b1b1b",
    "text_soft": "#5d5d5d",
    "plot_grid": "#e4dcef",
    "border": "#c9b3e5",
    "bar": "#c9b3e5",
    "marker_line": "#8d6fb8",
}


def history_frame(history):
    rows = [
        {
            "date": day.date,
            "completed": day.completed_count,
            "total": day.total_count,
            "percentage": day.percentage,
        }
        for day in history
    ]
    frame = pd.DataFrame(rows, columns=["date", "completed", "total", "percentage"])
    return frame.sort_values("date").reset_index(drop=True)


def apply_common_plot_style(fig, title):
    fig.update_layout(
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=PLOT_COLORS["text_main"]),
        margin=dict(l=40, r=20, t=40, b=30),
        xaxis=dict(
            showgrid=False,
            tickfont=dict(color=PLOT_COLORS["text_soft"]),
            showline=True,
            linecolor=PLOT_COLORS["border"],
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor=PLOT_COLORS["plot_grid"],
            zeroline=False,
            range=[0, 100],
            tickfont=dict(color=PLOT_COLORS["text_soft"]),
        ),
    )
    return fig


def completion_chart(frame, title="Completion (%)", height=260):
    import plotly.graph_objects as go

    fig = go.Figure(
        data=go.Bar(
            x=frame["date"],
            y=frame["percentage"],
            text=[f"{row.completed}/{row.total}" for row in frame.itertuples()],
            marker=dict(color=PLOT_COLORS["bar"], line=dict(width=1, color=PLOT_COLORS["marker_line"])),
        )
    )
    apply_common_plot_style(fig, title)
    fig.update_layout(height=height)
    fig.update_xaxes(type="category")
    return fig
