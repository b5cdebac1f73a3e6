from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Union

Label = Union[str, Sequence[str]]

INTERPRETERS = ("tex", "none")

TEX_SYMBOLS: dict[str, str] = {
    "alpha": "α",
    "beta": "β",
    "gamma": "γ",
    "delta": "δ",
    "epsilon": "ε",
    "theta": "θ",
    "lambda": "λ",
    "mu": "μ",
    "pi": "π",
    "rho": "ρ",
    "sigma": "σ",
    "tau": "τ",
    "phi": "φ",
    "omega": "ω",
    "Gamma": "Γ",
    "Delta": "Δ",
    "Theta": "Θ",
    "Lambda": "Λ",
    "Pi": "Π",
    "Sigma": "Σ",
    "Phi": "Φ",
    "Omega": "Ω",
    "pm": "±",
    "circ": "°",
    "infty": "∞",
    "times": "×",
    "leq": "≤",
    "geq": "≥",
}
_TEX_COMMAND = re.compile(r"\\([A-Za-z]+)")
_TEX_GROUP = re.compile(r"([\^_])\{([^{}]*)\}")


def label_text(label: Label) -> str:
    """Flatten a label into one string; sequences become multi-line text."""
    if isinstance(label, str):
        return label
    lines = list(label)
    if not all(isinstance(line, str) for line in lines):
        raise TypeError("multi-line labels must contain only strings")
    return "\n".join(lines)


def interpret(text: str, mode: str = "tex") -> str:
    if mode == "none":
        return text
    if mode != "tex":
        raise ValueError(f"unsupported interpreter: {mode!r}")
    out = _TEX_COMMAND.sub(lambda m: TEX_SYMBOLS.get(m.group(1), m.group(0)), text)
    out = _TEX_GROUP.sub(r"\2", out)
    return out.replace("\\{", "{").replace("\\}", "}")
