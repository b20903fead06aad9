"""
factor_loadings Examples Package
================================

Runnable examples for factor_loadings.

Examples
--------
factor_model_rotation : module
    Build loading matrices from (simulated) posterior draws, rotate them,
    and summarize the rotated stack against the rotated truth.

Quick Start
-----------
    $ python examples/factor_model_rotation.py

    >>> from examples import run_example
    >>> results = run_example('factor_model_rotation')
"""

__all__ = [
    "factor_model_rotation",
]


def list_examples():
    """Map example names to one-line descriptions."""
    return {
        "factor_model_rotation": (
            "Loading matrices from posterior draws, varimax rotation, "
            "and element-wise posterior summaries."
        ),
    }


def run_example(name, *args, **kwargs):
    """
    Dynamically import and run an example's ``main()``.

    Parameters
    ----------
    name : str
        Name of the example (without .py extension).
    *args, **kwargs
        Passed to ``main()``.
    """
    import importlib

    valid_examples = list_examples().keys()
    if name not in valid_examples:
        raise ValueError(
            f"Unknown example '{name}'. Valid examples: {', '.join(valid_examples)}"
        )

    module = importlib.import_module(f"examples.{name}")
    return module.main(*args, **kwargs)


__all__.extend([
    "list_examples",
    "run_example",
])
