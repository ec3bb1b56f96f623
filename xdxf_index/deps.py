"""
Shared dependencies for routes.
"""

from fastapi import Request

from xdxf_index.services.dictionary import Dictionary


def get_dictionary(request: Request) -> Dictionary:
    dictionary = getattr(request.app.state, "dictionary", None)
    if dictionary is None:
        dictionary = Dictionary()
        request.app.state.dictionary = dictionary
    return dictionary
