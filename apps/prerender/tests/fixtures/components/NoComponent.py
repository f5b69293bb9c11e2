def render(props):
    return "<span>unused</span>"
