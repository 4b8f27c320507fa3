"""
overview_output.py
------------------
Entry point: Builds the demo overview, applies an expression analysis and
renders one PNG per analysis time step.
"""

import logging

from overview_controller import decorate, render_time_series, save_time_series, scenario_expression
from overview_model import build_demo_overview
from overview_profile import get_profile


def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # 1. Build the diagram
    diagram = build_demo_overview()

    # 2. Select a branch and flag a hit
    decorate(diagram, selected=[2, 21], flagged=[11])

    # 3. Render every time step of the analysis
    canvases = render_time_series(diagram, get_profile("Copper"), scenario_expression(),
                                  selected_ids={21})

    # 4. Save
    for path in save_time_series(canvases, prefix="overview"):
        print(f"Overview rendered to '{path}'.")


if __name__ == "__main__":
    main()
