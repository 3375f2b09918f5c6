"""
Page Replacement Simulator — FIFO, LRU, Optimal & AFR

This application provides an interactive simulation and visualization of
page replacement algorithms:
    - FIFO (First-In-First-Out)
    - LRU (Least Recently Used)
    - Optimal (Belady's clairvoyant algorithm)
    - AFR (Age-Frequency-Recency weighted heuristic)

The simulation itself lives in engine.py; this module only collects and
validates input, runs the engine and renders its trace.

Built with Streamlit for the web interface and Plotly for visualizations.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from config import (
    DEFAULT_FRAME_COUNT,
    DEFAULT_REFERENCE_STRING,
    DEFAULT_W1,
    DEFAULT_W2,
    EMPTY_SLOT,
    EVENT_LOG_TAIL,
    MAX_FRAME_COUNT,
    MIN_FRAME_COUNT,
)
from engine import ReplacementPolicy, SimulationResult, compare_policies, simulate
from utils import (
    format_frame,
    format_frames,
    get_color,
    parse_reference_string,
    parse_weight,
    trace_rows,
    validate_frame_count,
)


# =============================================================================
# CHART BUILDERS
# =============================================================================

def build_trace_figure(result: SimulationResult) -> go.Figure:
    """
    Build a heatmap of frame contents over time.

    Rows are frames, columns are steps. Cells show the resident page, and
    columns where a page fault occurred are marked in the x-axis labels.

    Args:
        result (SimulationResult): The run to visualize

    Returns:
        go.Figure: Plotly heatmap figure
    """
    steps = result.steps
    x = [f"{i + 1}:{s.page}{'*' if s.fault else ''}" for i, s in enumerate(steps)]
    y = [f"F{j}" for j in range(result.frame_count)]

    # Discrete colorscale: one color band per distinct page
    pages = sorted({f for s in steps for f in s.frames if f != EMPTY_SLOT})
    index = {p: i for i, p in enumerate(pages)}
    top = max(len(pages) - 1, 1)
    colorscale = [[index[p] / top, get_color(p)] for p in pages]
    if len(pages) == 1:
        colorscale.append([1.0, get_color(pages[0])])

    z = []      # Color index per cell, None for empty
    text = []   # Labels for each cell
    for j in range(result.frame_count):
        z.append([None if s.frames[j] == EMPTY_SLOT else index[s.frames[j]] for s in steps])
        text.append([format_frame(s.frames[j]) for s in steps])

    fig = go.Figure()
    fig.add_trace(go.Heatmap(
        x=x,
        y=y,
        z=z,
        text=text,
        texttemplate="%{text}",
        colorscale=colorscale,
        zmin=0,
        zmax=top,
        showscale=False,
        hoverinfo="text",
        xgap=2,
        ygap=2,
    ))
    fig.update_layout(
        height=120 + 40 * result.frame_count,
        title=f"{result.policy} — frames after each reference (* = fault)",
        yaxis=dict(autorange="reversed"),
    )
    return fig


def build_comparison_figure(results) -> go.Figure:
    """Bar chart of total faults per policy."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=list(results.keys()),
        y=[r.faults for r in results.values()],
        text=[r.faults for r in results.values()],
        marker_color=["lightgreen" if p == ReplacementPolicy.OPTIMAL else "lightblue"
                      for p in results],
    ))
    fig.update_layout(height=300, title="Page Faults by Policy")
    return fig


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

# Configure the Streamlit page
st.set_page_config(page_title="Page Replacement Simulator", layout="wide")

# Page selector for switching between Simulator and Concepts views
page = st.sidebar.radio("Choose View", ["Simulator", "Concepts"])

st.title("Page Replacement Simulator — FIFO, LRU, Optimal & AFR")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if page == "Concepts":
    st.header("Page Replacement Concepts")
    st.markdown(
        """
        ### **Page Fault**
        - A referenced page is not resident in any frame.
        - The page must be loaded; if every frame is full a *victim* is evicted.

        ### **FIFO (First In First Out)**
        - Evict the page that was loaded earliest.
        - Re-referencing a page does not protect it.

        ### **LRU (Least Recently Used)**
        - Evict the page that has gone unused the longest.
        - The trace lists frames from most to least recently used.

        ### **Optimal**
        - Evict the page whose next use is farthest in the future.
        - Needs the whole reference string in advance, so it is a lower bound
          on faults rather than a practical policy.

        ### **AFR (Age-Frequency-Recency)**
        - Each frame tracks how often its page was used and how many
          references ago it was last used.
        - Score = `w1 × frequency + w2 / (recency + 1)`; the lowest score is
          evicted, earliest frame first on ties.
        - `w1 = 1, w2 = 0` behaves like LFU.
        """
    )
    st.stop()

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

reference_input = st.sidebar.text_input(
    "Reference string (space or comma separated)",
    value=DEFAULT_REFERENCE_STRING,
)

frame_input = st.sidebar.number_input(
    "Number of frames",
    min_value=MIN_FRAME_COUNT,
    max_value=MAX_FRAME_COUNT,
    value=DEFAULT_FRAME_COUNT,
    step=1,
)

policy = st.sidebar.selectbox(
    "Replacement Policy",
    options=list(ReplacementPolicy.ALL),
)

# AFR weights only apply to the AFR policy
w1_input, w2_input = DEFAULT_W1, DEFAULT_W2
if policy == ReplacementPolicy.AFR:
    w1_input = st.sidebar.number_input("w1 (frequency)", value=DEFAULT_W1)
    w2_input = st.sidebar.number_input("w2 (recency)", value=DEFAULT_W2)

run_clicked = st.sidebar.button("Run", key="run")

if st.sidebar.button("Reset", key="reset"):
    st.session_state.pop("result", None)
    st.session_state.pop("comparison", None)
    st.sidebar.success("Simulation reset")

# -----------------------------------------------------------------------------
# RUN - Validate at the boundary, then call the engine
# -----------------------------------------------------------------------------

if run_clicked:
    try:
        pages = parse_reference_string(reference_input)
        frame_count = validate_frame_count(frame_input)
        w1 = parse_weight(w1_input, "w1")
        w2 = parse_weight(w2_input, "w2")
    except ValueError as e:
        st.sidebar.error(str(e))
    else:
        st.session_state.result = simulate(policy, pages, frame_count, w1, w2)
        st.session_state.comparison = compare_policies(pages, frame_count, w1, w2)

result = st.session_state.get("result")

if result is None:
    st.info("Enter a reference string and click **Run** to start.")
    st.stop()

# =============================================================================
# MAIN CONTENT AREA - Two Column Layout
# =============================================================================

col1, col2 = st.columns([1, 2])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Statistics and Event Log
# -----------------------------------------------------------------------------

with col1:
    st.subheader(f"Statistics ({result.policy})")
    stats = result.get_stats()

    st.metric("Page References", stats["total_refs"])
    st.metric("Total Page Faults", stats["faults"])
    st.metric("Hit Ratio", stats["hit_ratio"])
    if result.steps:
        st.write(f"Final frames: `{format_frames(result.steps[-1].frames)}`")

    st.subheader("Event Log")
    for ev in result.events[-EVENT_LOG_TAIL:][::-1]:
        st.write(ev)

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Visualizations
# -----------------------------------------------------------------------------

with col2:
    st.subheader("Frame Trace")
    if result.total_refs == 0:
        st.write("Reference string empty — nothing to simulate")
    else:
        st.plotly_chart(build_trace_figure(result))
        st.table(trace_rows(result))

    st.subheader("Policy Comparison")
    comparison = st.session_state.get("comparison", {})
    if comparison:
        st.plotly_chart(build_comparison_figure(comparison))
        st.table([
            {"policy": name, **r.get_stats()}
            for name, r in comparison.items()
        ])

# =============================================================================
# FOOTER - Usage Tips
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Enter a reference string and a frame count, pick a policy and click **Run**.\n"
    "- LRU lists frames from most to least recently used; other policies show fixed frame slots.\n"
    "- Optimal is the lower bound: no policy can fault less on the same input."
)
