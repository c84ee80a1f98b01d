"""
Forms and the form components that read submitted input.

A `Form` orchestrates the submit phase: capture raw input, convert, validate
and finally push converted values into the component models. A
`FormSubmitter` may opt out of that default processing, in which case only
its own callbacks run.
"""

import logging
from collections.abc import MutableSet
from typing import Any, Callable, List, Optional, Protocol, Sequence, runtime_checkable

from markupsafe import Markup, escape

from .component import MarkupContainer
from .markup import ComponentTag
from .models import Model
from .visit import iter_children

logger = logging.getLogger(__name__)

# Joins multiple submitted values into one raw-input string.
VALUE_SEPARATOR = ";"

NO_RAW_INPUT = "[-NO-RAW-INPUT-]"


@runtime_checkable
class FormSubmitter(Protocol):
    def on_submit(self) -> None:
        ...

    def on_error(self) -> None:
        ...

    def on_after_submit(self) -> None:
        ...

    def get_form(self) -> Optional["Form"]:
        ...

    def get_default_form_processing(self) -> bool:
        ...


class FormComponent(MarkupContainer):
    """A component that owns a request parameter and converts it into its model object."""

    tag_name = "span"

    def __init__(self, id: str, model: Optional[Model] = None, required: bool = False):
        super().__init__(id, model)
        self.required = required
        self.raw_input: Optional[str] = NO_RAW_INPUT
        self.converted_input: Any = None
        self.errors: List[str] = []

    @property
    def input_name(self) -> str:
        return self.path

    # ---------------- Input ----------------

    def get_input_as_array(self) -> Optional[List[str]]:
        page = self.page
        if page is None or page.request is None:
            return None
        return page.request.get_values(self.input_name)

    def input_changed(self) -> None:
        """Capture the current request's values as raw input."""
        values = self.get_input_as_array()
        self.raw_input = VALUE_SEPARATOR.join(v for v in values if v is not None) if values else None

    def has_raw_input(self) -> bool:
        return self.raw_input != NO_RAW_INPUT

    def clear_input(self) -> None:
        self.raw_input = NO_RAW_INPUT
        self.converted_input = None

    def convert_value(self, values: Optional[Sequence[Optional[str]]]) -> Any:
        if not values:
            return None
        return values[0]

    def convert_input(self) -> None:
        self.converted_input = self.convert_value(self.get_input_as_array())

    # ---------------- Values ----------------

    def get_model_value(self) -> str:
        obj = self.get_model_object()
        return "" if obj is None else str(obj)

    def get_value(self) -> str:
        """Raw input when present (e.g. a redisplay after a failed submit), else the model's value."""
        if self.raw_input == NO_RAW_INPUT:
            return self.get_model_value()
        return self.raw_input or ""

    def update_model(self) -> None:
        self.set_model_object(self.converted_input)

    # ---------------- Validation ----------------

    def error(self, message: str) -> None:
        self.errors.append(message)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def validate(self) -> None:
        self.errors = []
        if self.required and not self.get_input_as_array():
            self.error(f"'{self.path}' is required.")
            return
        self.convert_input()

    def on_component_tag(self, tag: ComponentTag) -> None:
        super().on_component_tag(tag)
        tag.put("name", self.input_name)
        if not self.is_enabled_in_hierarchy():
            tag.put("disabled", "disabled")


def _refill(collection: Any, values: Sequence[Any]) -> None:
    collection.clear()
    if isinstance(collection, MutableSet):
        for value in values:
            collection.add(value)
    else:
        collection.extend(values)


def update_collection_model(component: FormComponent) -> None:
    """
    Commit `converted_input` into the component's model collection.

    The existing collection instance is cleared and refilled in place so
    callers holding a reference observe the new selection; a fresh list is
    set when the model holds nothing yet.
    """
    converted = list(component.converted_input or [])
    collection = component.get_model_object()
    if collection is None:
        component.set_model_object(converted)
        return
    _refill(collection, converted)
    component.set_model_object(collection)


class Form(MarkupContainer):
    tag_name = "form"

    def __init__(
        self,
        id: str,
        model: Optional[Model] = None,
        on_submit: Optional[Callable[["Form"], None]] = None,
        on_error: Optional[Callable[["Form"], None]] = None,
    ):
        super().__init__(id, model)
        self._on_submit = on_submit
        self._on_error = on_error
        self._participants: List[FormSubmitter] = []

    def on_request(self) -> None:
        self.on_form_submitted()

    def register_submit_participant(self, participant: FormSubmitter) -> None:
        """Queue `participant` for this form's next submit phase."""
        self._participants.append(participant)
        logger.debug("Form %s: registered submit participant %r", self.path, participant)

    @property
    def pending_participants(self) -> List[FormSubmitter]:
        return list(self._participants)

    def form_components(self) -> List[FormComponent]:
        return list(iter_children(self, FormComponent))

    def on_form_submitted(self, submitter: Optional[FormSubmitter] = None) -> bool:
        """
        Run the submit phase for `submitter` and every registered participant.

        With no submitter and no participants the whole form is processed.
        A participant that disables default form processing gets only its own
        `on_submit`/`on_after_submit`; form components are left untouched.
        Returns True when every processed participant succeeded.
        """
        participants, self._participants = self._participants, []
        if submitter is not None:
            participants.append(submitter)
        if not participants:
            return self.process(None)

        ok = True
        for participant in participants:
            if participant.get_default_form_processing():
                ok = self.process(participant) and ok
                continue
            logger.debug("Form %s: running %r without default processing", self.path, participant)
            participant.on_submit()
            participant.on_after_submit()
        return ok

    def process(self, submitter: Optional[FormSubmitter] = None) -> bool:
        components = self.form_components()
        for component in components:
            component.input_changed()
            component.validate()

        invalid = [c for c in components if c.has_errors]
        if invalid:
            logger.info("Form %s: %d component(s) failed validation", self.path, len(invalid))
            if submitter is not None:
                submitter.on_error()
            self.on_error()
            return False

        for component in components:
            component.update_model()
            component.clear_input()

        if submitter is not None:
            submitter.on_submit()
        self.on_submit()
        if submitter is not None:
            submitter.on_after_submit()
        return True

    def on_submit(self) -> None:
        if self._on_submit is not None:
            self._on_submit(self)

    def on_error(self) -> None:
        if self._on_error is not None:
            self._on_error(self)

    def on_component_tag(self, tag: ComponentTag) -> None:
        super().on_component_tag(tag)
        tag.put("method", "post")
        page = self.page
        if page is not None:
            tag.put("action", page.listener_url(self))


class Button(MarkupContainer):
    """Plain submit button rendered inside a form."""

    tag_name = "button"

    def __init__(self, id: str, label: str = "Submit"):
        super().__init__(id, Model(label))

    def on_component_tag(self, tag: ComponentTag) -> None:
        super().on_component_tag(tag)
        tag.put("type", "submit")

    def render_body(self) -> Markup:
        return escape(self.get_model_object())
