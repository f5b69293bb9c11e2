class Component:
    def __init__(self, props):
        self.props = props

    def render(self):
        return "<div>Hello, test!</div>"
