"""sd-bootstrap: fetch a Stable Diffusion model and runner, then generate.

Downloads and verifies the model weights and the ``stable-diffusion.cpp``
executable bundle on first use, asks for a prompt, and shells out to the
executable to render an image.
"""

from sd_bootstrap.version import __version__

__all__: list[str] = ["__version__"]
