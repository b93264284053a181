"""
Page Replacement Visualizer — FIFO, LRU & Optimal

This application steps a page reference string through a fixed number of
memory frames and shows, one reference at a time, which page is hit, which
page faults and which resident page gets evicted.

The simulation itself lives in engine.py / policies.py. This module only
reads the engine's state and calls its stepping operations.

Built with Streamlit for the web interface and Plotly for visualizations.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from config import SimulatorConfig
from engine import EngineState, SimulationEngine
from errors import SimulationError
from policies import EventType, ReplacementPolicy
from utils import describe_event, get_color, speed_to_delay


config = SimulatorConfig()

# Configure the Streamlit page
st.set_page_config(page_title="Page Replacement Visualizer", layout="wide")
st.title("Page Replacement Visualizer — FIFO, LRU & Optimal")

# -----------------------------------------------------------------------------
# SESSION STATE - Engine Persistence
# -----------------------------------------------------------------------------

# The engine survives Streamlit reruns inside the session state
if 'engine' not in st.session_state:
    st.session_state.engine = SimulationEngine(config)

engine: SimulationEngine = st.session_state.engine

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

policy = st.sidebar.selectbox(
    "Replacement Policy",
    options=list(ReplacementPolicy),
    format_func=lambda p: p.value,
)

frame_count = st.sidebar.number_input(
    "Number of frames",
    min_value=config.MIN_FRAMES,
    max_value=config.MAX_FRAMES,
    value=config.DEFAULT_FRAMES,
    step=1,
)

reference_input = st.sidebar.text_area(
    "Page reference string (comma separated page numbers)",
    value=config.DEFAULT_REFERENCES,
)

run_speed = st.sidebar.slider(
    "Playback speed",
    min_value=config.MIN_SPEED,
    max_value=config.MAX_SPEED,
    value=config.DEFAULT_SPEED,
)

if st.sidebar.button("Start Simulation"):
    try:
        engine.configure(policy, int(frame_count), reference_input)
        st.sidebar.success(f"Started {policy.value} with {int(frame_count)} frames")
    except SimulationError as e:
        st.sidebar.error(str(e))

if st.sidebar.button("Reset Simulation"):
    engine.reset()
    st.sidebar.success("Simulation reset")

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Controls and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Controls")

    if st.button("Step Forward", disabled=not engine.can_step_forward()):
        try:
            engine.step_forward()
        except SimulationError as e:
            st.error(str(e))

    if st.button("Step Back", disabled=not engine.can_step_backward()):
        engine.step_backward()

    if st.button("Run to End", disabled=not engine.can_step_forward()):
        # Streamlit only repaints after the loop, the delay paces the log
        with st.spinner("Running..."):
            engine.run(delay=speed_to_delay(run_speed) / 10)

    st.subheader("Event Log")
    for entry in engine.event_log[-config.EVENT_LOG_LIMIT:][::-1]:
        st.write(entry)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------


def frames_figure(state: EngineState, markers) -> go.Figure:
    """Horizontal bars, one per frame, labelled with the resident page."""
    fig = go.Figure()
    labels = []
    colors = []
    for i, page in enumerate(state.frames):
        label = f"Frame {i}: " + (f"P{page}" if page is not None else "Empty")
        if markers[i]:
            label += f"  ({markers[i]})"
        labels.append(label)
        colors.append(get_color(page, i, state.last_event))

    fig.add_trace(go.Bar(
        x=[1] * len(labels),
        y=[f"F{i}" for i in range(len(labels))],
        orientation='h',
        text=labels,
        marker_color=colors,
        marker_line_color="#94a3b8",
        marker_line_width=2,
        hoverinfo='text',
        hovertext=labels,
    ))
    fig.update_layout(
        height=60 + 45 * len(labels),
        showlegend=False,
        xaxis=dict(showticklabels=False),
        yaxis=dict(autorange="reversed"),
    )
    return fig


def references_figure(state: EngineState) -> go.Figure:
    """The reference string, processed pages greyed out, current page highlighted."""
    colors = []
    for i in range(len(state.references)):
        if i < state.cursor:
            colors.append("#f1f5f9")
        elif i == state.cursor:
            colors.append("#dbeafe")
        else:
            colors.append("#ffffff")

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=list(range(len(state.references))),
        y=[1] * len(state.references),
        text=[str(p) for p in state.references],
        marker_color=colors,
        marker_line_color="#cbd5e1",
        marker_line_width=1,
        hoverinfo='text',
    ))
    fig.update_layout(height=150, showlegend=False, yaxis=dict(showticklabels=False))
    return fig


with col2:
    state = engine.current_state()

    if state.policy is None:
        st.info("Waiting to start... choose the settings and press Start Simulation.")
    else:
        st.subheader(f"Visualization ({state.policy.value})")

        status = describe_event(state.last_event)
        if state.last_event.type is EventType.HIT:
            st.success(status)
        elif state.last_event.type is EventType.FAULT:
            st.error(status)
        else:
            st.info(status)

        st.plotly_chart(frames_figure(state, engine.frame_markers()), use_container_width=True)

        st.subheader("Page String")
        st.plotly_chart(references_figure(state), use_container_width=True)

        # ----- Statistics Display -----
        st.subheader("Statistics")
        stats = engine.get_stats()
        m1, m2, m3 = st.columns(3)
        m1.metric("Page Faults", stats['faults'])
        m2.metric("Page Hits", stats['hits'])
        m3.metric("Hit Ratio", f"{stats['hit_ratio'] * 100:.1f}%")

        fig2 = go.Figure()
        fig2.add_trace(go.Bar(x=["Hits", "Faults"], y=[stats['hits'], stats['faults']]))
        fig2.update_layout(height=300, title="Hits vs Faults")
        st.plotly_chart(fig2, use_container_width=True)
