"""Declarative record forms.

Each record type is described by a :class:`FormSchema`: an ordered list of
:class:`FieldSpec` entries naming the field, how it is rendered, its
default and its validators. :class:`RecordForm` holds the editing state
for one schema and knows nothing about Streamlit; the renderer lives in
:mod:`finance_tracker.components.record_form`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .settings import get_options

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Optional[str]]

GENERIC_SUBMIT_ERROR = 'Failed to save. Please try again.'


def required(message: str) -> Validator:
    """Validator rejecting missing or whitespace-only values."""
    def _check(value: Any) -> Optional[str]:
        if value is None or not str(value).strip():
            return message
        return None
    return _check


def positive_amount(value: Any) -> Optional[str]:
    """Shared amount rule: present, numeric, finite and strictly positive."""
    text = '' if value is None else str(value).strip()
    if not text:
        return 'Amount is required'
    try:
        number = float(text)
    except ValueError:
        return 'Amount must be a positive number'
    if not math.isfinite(number) or number <= 0:
        return 'Amount must be a positive number'
    return None


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str  # text | textarea | date | select | suggest | amount
    default: Any = ''
    options: Tuple[str, ...] = ()
    validators: Tuple[Validator, ...] = ()
    numeric: bool = False
    placeholder: str = ''
    max_length: Optional[int] = None
    # (stored value, display label) pairs for options shown differently
    option_labels: Tuple[Tuple[str, str], ...] = ()

    def option_label(self, value: Any) -> str:
        return dict(self.option_labels).get(value, '' if value is None else str(value))

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default

    def validate(self, value: Any) -> Optional[str]:
        for validator in self.validators:
            message = validator(value)
            if message:
                return message
        return None


@dataclass(frozen=True)
class FormSchema:
    record_type: str
    title: str
    fields: Tuple[FieldSpec, ...]
    create_description: str = ''
    edit_description: str = ''

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def defaults(self) -> Dict[str, Any]:
        return {f.name: f.default_value() for f in self.fields}


def _today() -> str:
    return date.today().isoformat()


def _amount_field() -> FieldSpec:
    return FieldSpec(
        'amount', 'Amount', 'amount',
        validators=(positive_amount,), numeric=True, placeholder='0.00',
    )


def build_schemas(options: Optional[Mapping[str, Any]] = None) -> Dict[str, FormSchema]:
    """Build the schema table from the configured dropdown options."""
    options = options or get_options()
    currencies = tuple(c['value'] for c in options['currencies'])
    currency_labels = tuple((c['value'], c.get('label', c['value'])) for c in options['currencies'])
    return {
        'transaction': FormSchema(
            'transaction', 'Transaction',
            (
                FieldSpec('date', 'Date', 'date', default=_today,
                          validators=(required('Date is required'),)),
                FieldSpec('type', 'Type', 'select', options=tuple(options['transaction_types']),
                          validators=(required('Type is required'),)),
                FieldSpec('name', 'Name', 'text', placeholder='Transaction name', max_length=100,
                          validators=(required('Name is required'),)),
                FieldSpec('category', 'Category', 'suggest', options=tuple(options['categories']),
                          validators=(required('Category is required'),)),
                FieldSpec('method', 'Method', 'suggest', options=tuple(options['methods']),
                          validators=(required('Method is required'),)),
                _amount_field(),
            ),
            create_description='Enter the transaction details below.',
            edit_description='Update the transaction details below.',
        ),
        'note': FormSchema(
            'note', 'Note',
            (
                FieldSpec('heading', 'Note Title', 'text', placeholder='Enter note title', max_length=200,
                          validators=(required('Note title is required'),)),
                FieldSpec('content', 'Note Content', 'textarea', placeholder='Write your note content here...',
                          validators=(required('Note content is required'),)),
            ),
            create_description='Create a new note to keep track of important information.',
            edit_description='Update your note details.',
        ),
        'budget': FormSchema(
            'budget', 'Budget',
            (
                FieldSpec('category', 'Category', 'suggest', options=tuple(options['categories']),
                          validators=(required('Category is required'),)),
                _amount_field(),
            ),
            create_description='Set a budget for {period}.',
            edit_description='Update the budget details for {period}.',
        ),
        'asset': FormSchema(
            'asset', 'Asset',
            (
                FieldSpec('name', 'Asset Name', 'text', placeholder='Enter asset name', max_length=100,
                          validators=(required('Asset name is required'),)),
                FieldSpec('currency', 'Currency', 'select', default=options.get('base_currency', 'AED'),
                          options=currencies, option_labels=currency_labels,
                          validators=(required('Currency is required'),)),
                _amount_field(),
                FieldSpec('notes', 'Notes', 'textarea', max_length=1000,
                          placeholder='Add any additional notes about this asset...'),
            ),
            create_description='Add a new asset to track your portfolio.',
            edit_description='Update the asset details below.',
        ),
    }


FORM_SCHEMAS: Dict[str, FormSchema] = build_schemas()


class FormMode(Enum):
    CLOSED = 'closed'
    CREATE = 'create'
    EDIT = 'edit'


def _amount_text(value: Any) -> str:
    if value is None or value == '':
        return ''
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    return str(int(number)) if number.is_integer() else repr(number)


class RecordForm:
    """Editing state for one record form.

    The form is ``CLOSED`` until :meth:`open` is called; a seed record
    selects ``EDIT`` mode, otherwise ``CREATE``. ``revision`` changes on
    every open and close so renderers can key fresh widgets.
    """

    def __init__(self, schema: FormSchema | str):
        self.schema = FORM_SCHEMAS[schema] if isinstance(schema, str) else schema
        self.mode = FormMode.CLOSED
        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.loading = False
        self.record_id: Any = None
        self.revision = 0

    @property
    def is_open(self) -> bool:
        return self.mode is not FormMode.CLOSED

    @property
    def is_editing(self) -> bool:
        return self.mode is FormMode.EDIT

    def open(self, record: Optional[Mapping[str, Any]] = None) -> None:
        self.errors = {}
        self.loading = False
        self.revision += 1
        defaults = self.schema.defaults()
        if record is None:
            self.mode = FormMode.CREATE
            self.record_id = None
            self.values = defaults
            return

        self.mode = FormMode.EDIT
        self.record_id = record.get('id')
        values: Dict[str, Any] = {}
        for spec in self.schema.fields:
            raw = record.get(spec.name)
            if spec.numeric:
                values[spec.name] = _amount_text(raw)
            elif raw is None or raw == '':
                values[spec.name] = defaults[spec.name]
            else:
                values[spec.name] = raw
        self.values = values

    def set_value(self, name: str, value: Any) -> None:
        self.values[name] = value
        self.errors.pop(name, None)

    def update(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            self.set_value(name, value)

    def validate(self) -> bool:
        errors: Dict[str, str] = {}
        for spec in self.schema.fields:
            message = spec.validate(self.values.get(spec.name))
            if message:
                errors[spec.name] = message
        self.errors = errors
        return not errors

    def payload(self) -> Dict[str, Any]:
        """Submission payload: numbers coerced, empty strings dropped."""
        data: Dict[str, Any] = {}
        for spec in self.schema.fields:
            value = self.values.get(spec.name)
            if value is None or value == '':
                continue
            data[spec.name] = float(value) if spec.numeric else value
        if self.is_editing and self.record_id is not None:
            data['id'] = self.record_id
        return data

    def submit(self, handler: Callable[[Dict[str, Any]], Any]) -> bool:
        """Validate and hand the payload to ``handler``.

        Returns True when the handler succeeded and the form closed. A
        handler exception leaves the form open with a generic error.
        """
        if not self.is_open:
            raise RuntimeError('Cannot submit a closed form')
        if not self.validate():
            return False

        self.loading = True
        try:
            handler(self.payload())
        except Exception:
            logger.exception("Error submitting %s", self.schema.record_type)
            self.loading = False
            self.errors = {'submit': GENERIC_SUBMIT_ERROR}
            return False

        self.loading = False
        self.close()
        return True

    def close(self) -> None:
        self.mode = FormMode.CLOSED
        self.values = {}
        self.errors = {}
        self.loading = False
        self.record_id = None
        self.revision += 1

    def description(self, **context: Any) -> str:
        template = self.schema.edit_description if self.is_editing else self.schema.create_description
        try:
            return template.format(**context)
        except KeyError:
            return template
