from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np
from PIL import Image

from gridlegend import figure, grid_legend


STATES = ("Texas", "Ohio", "Maine")
FITS = ("Data", "Linear", "Quadratic")
COLORS = ((255, 120, 90), (90, 190, 255), (140, 220, 120))


def _render(location: str, size: tuple[int, int]) -> np.ndarray:
    fig = figure(width=size[0], height=size[1])
    ax = fig.axes(title="Population by state")
    years = np.arange(1900, 2030, 10, dtype=np.float64)
    for idx, color in enumerate(COLORS):
        pop = (idx + 1) * 2.0 + 0.04 * (years - 1900) * (idx + 1)
        ax.scatter(x=years, y=pop + np.sin(years * 0.07), color=color, size=6, marker="o")
        ax.plot(x=years, y=pop, color=color, width=1, line_style="--")
        ax.plot(x=years, y=pop + 0.0002 * (years - 1900) ** 2, color=color, width=1, line_style=":")

    legend = grid_legend(fig, STATES, FITS, location=location, alignment="center", font_size=11)
    if legend is None:
        raise RuntimeError("no legendable series")
    first = fig.to_rgba()
    # a container resize re-places the legend without re-measuring labels
    fig.resize(size[0] + 160, size[1])
    return np.concatenate([first[:, : size[0]], fig.to_rgba()[:, : size[0]]], axis=0)


def main() -> None:
    parser = argparse.ArgumentParser(description="Render a grid legend demo to PNG")
    parser.add_argument("--location", default="eastoutside")
    parser.add_argument("--out", type=Path, default=Path("grid_legend_demo.png"))
    args = parser.parse_args()
    frame = _render(args.location, (900, 480))
    Image.fromarray(frame).save(args.out)
    print(f"wrote {args.out}")


if __name__ == "__main__":
    main()
