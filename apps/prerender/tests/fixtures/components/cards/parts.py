from html import escape


def title(props):
    return f"<h2>{escape(str(props.get('title', '')))}</h2>"
