"""
Component tree, forms and the check group.

This package is intentionally free of web framework dependencies so it can be
driven by any request layer that supplies request parameters.
"""

from .check import Check, CheckGroup, SelectionChangeSubmitter
from .component import Component, Label, MarkupContainer, Page, RequestListener
from .errors import ComponentNotFoundError, FormTreeRuntimeError, UnresolvedTokenError
from .form import VALUE_SEPARATOR, Button, Form, FormComponent, FormSubmitter, update_collection_model
from .markup import ComponentTag
from .models import CollectionModel, Model
from .visit import Visit, iter_children, visit_children

__all__ = [
    "Button",
    "Check",
    "CheckGroup",
    "CollectionModel",
    "Component",
    "ComponentNotFoundError",
    "ComponentTag",
    "Form",
    "FormComponent",
    "FormSubmitter",
    "FormTreeRuntimeError",
    "Label",
    "MarkupContainer",
    "Model",
    "Page",
    "RequestListener",
    "SelectionChangeSubmitter",
    "UnresolvedTokenError",
    "VALUE_SEPARATOR",
    "Visit",
    "iter_children",
    "update_collection_model",
    "visit_children",
]
