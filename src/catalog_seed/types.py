"""Parameter types accepted by DatabaseService."""

Params = tuple | list | dict
ParamsList = list[tuple] | list[list]
