from asciiramp.model import RampError

# Ramps run darkest to brightest: index 0 is used for luminance 0.0.
# http://paulbourke.net/dataformats/asciiart
STANDARD = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~i!lI;:,\"^`"
ALT = "@8LF#]{}[*+=-;:,. "
SIMPLE = "@%#*+=-:. "
CUSTOM = "@8&#*+=<->:. "

RAMPS = {
    "standard": STANDARD,
    "alt": ALT,
    "simple": SIMPLE,
    "custom": CUSTOM,
}


def check_ramp(ramp: str) -> str:
    if not isinstance(ramp, str):
        raise RampError(f"Ramp must be a string, got {type(ramp).__name__}")
    if len(ramp) == 0:
        raise RampError("Ramp must contain at least one character")
    return ramp
