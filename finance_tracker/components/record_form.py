"""Streamlit renderer for :class:`finance_tracker.forms.RecordForm`.

One renderer serves every record type: each :class:`FieldSpec` kind maps
to a widget. Widget keys include the form revision so that reopening the
form starts from fresh widgets seeded with the form's values.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, List, Optional

import streamlit as st

from ..forms import FieldSpec, RecordForm


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return date.today()


def _option_list(spec: FieldSpec, value: Any) -> List[str]:
    options = list(spec.options)
    if value and value not in options:
        options.append(str(value))
    return options


def _index_of(options: List[str], value: Any) -> Optional[int]:
    return options.index(value) if value in options else None


def render_field(spec: FieldSpec, value: Any, key: str) -> Any:
    """Render one field and return the widget's current value."""
    label = spec.label
    if spec.kind == 'date':
        picked = st.date_input(label, value=_as_date(value), key=key)
        return picked.isoformat() if picked else ''
    if spec.kind == 'select':
        options = _option_list(spec, value)
        return st.selectbox(
            label, options, index=_index_of(options, value),
            placeholder=f"Select {label.lower()}", format_func=spec.option_label, key=key,
        ) or ''
    if spec.kind == 'suggest':
        # Free text with suggestions: typed values are accepted as new options
        options = _option_list(spec, value)
        return st.selectbox(
            label, options, index=_index_of(options, value),
            placeholder=f"Select or type a {label.lower()}",
            accept_new_options=True, key=key,
        ) or ''
    if spec.kind == 'textarea':
        return st.text_area(
            label, value=value or '', placeholder=spec.placeholder,
            max_chars=spec.max_length, key=key,
        )
    return st.text_input(
        label, value='' if value is None else str(value), placeholder=spec.placeholder,
        max_chars=spec.max_length, key=key,
    )


def render_record_form(
    form: RecordForm,
    on_submit: Callable[[], bool],
    *,
    key: str,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Render ``form`` when it is open.

    ``on_submit`` is called after the widget values have been copied into
    the form; it returns True when the record was saved.
    """
    if not form.is_open:
        return

    verb = "Edit" if form.is_editing else "Add"
    prefix = f"{key}-{form.revision}"
    with st.container(border=True):
        st.markdown(f"#### {verb} {form.schema.title}")
        description = form.description(**(context or {}))
        if description:
            st.caption(description)

        with st.form(key=prefix, clear_on_submit=False):
            values: Dict[str, Any] = {}
            for spec in form.schema.fields:
                values[spec.name] = render_field(spec, form.values.get(spec.name), f"{prefix}-{spec.name}")
                error = form.errors.get(spec.name)
                if error:
                    st.caption(f":red[{error}]")

            cols = st.columns(2)
            submitted = cols[0].form_submit_button(
                "Update" if form.is_editing else "Save", type="primary", disabled=form.loading,
            )
            cancelled = cols[1].form_submit_button("Cancel")

        if form.errors.get('submit'):
            st.error(form.errors['submit'])

    if cancelled:
        form.close()
        st.rerun()
    if submitted:
        form.update(values)
        on_submit()
        st.rerun()
