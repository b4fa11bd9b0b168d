from checker import check


def wire(text: str):
    """Split a whitespace-separated string of wire-form tokens."""
    return text.split()


def program(body: str):
    """Wrap statement tokens in `void main ( ) { ... } $`."""
    return wire(f"void main ( ) {{ {body} }} $")


def check_body(body: str, **kwargs):
    """Convenience: wrap a statement body and run the full check."""
    return check(program(body), **kwargs)
