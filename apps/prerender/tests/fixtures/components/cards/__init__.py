from .parts import title


def Component(props):
    return f"<article>{title(props)}</article>"
