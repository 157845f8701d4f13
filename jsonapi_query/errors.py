"""Validation errors raised while building a query chain."""


class InvalidArgument(ValueError):
    """A chain method received an argument it cannot turn into query state."""


class InvalidSortDirection(InvalidArgument):
    def __init__(self, direction):
        self.direction = direction
        super().__init__(
            f'JsonApiQuery: Invalid sort direction: "{direction}". Allowed only "asc" or "desc".'
        )


class InvalidFieldsSpec(InvalidArgument):
    def __init__(self, spec=None):
        self.spec = spec
        super().__init__("JsonApiQuery: Invalid fields list.")
