import pandas as pd
import streamlit as st
from shiftboard.api.schemas.dashboard import DashboardView, FilterUpdate
from shiftboard.config import settings
from shiftboard.dashboard.formatting import format_pair, format_timestamp, hours_to_hhmm
from shiftboard.dashboard.models import (
    GROUP_FILTER_OPTIONS, STATUS_FILTER_OPTIONS, ContractFilter, ShiftStatus, SortColumn, ViewPhase,
)
from shiftboard.ui.api_client import get_client, APIError

st.title("Hora extra e disponibilidade")

client = get_client()
if not client.is_authenticated:
    st.warning("Please sign in first.")
    st.stop()

try:
    view = client.get_dashboard()
except APIError as e:
    st.error(f"Failed to load dashboard: {e.detail}")
    st.stop()

# --- Header ---
c1, c2 = st.columns([3, 1])
profile = view.profile
c1.subheader(profile.name if profile and profile.name else "Usuario")
c1.caption(
    f"{(profile.base if profile else None) or 'SEM BASE'}"
    + (" · admin" if profile and profile.is_admin else "")
)
if c2.button("Atualizar"):
    try:
        client.refresh_dashboard()
    except APIError as e:
        st.error(f"Refresh failed: {e.detail}")
    st.rerun()

# --- Filters ---
filters = view.filters
status_values = [value for value, _ in STATUS_FILTER_OPTIONS]
status_labels = dict(STATUS_FILTER_OPTIONS)
contract_labels = {ContractFilter.ALL: "Todas", ContractFilter.FULL: "Full-time", ContractFilter.PART: "Part-time"}

f1, f2, f3, f4 = st.columns(4)
search = f1.text_input("Busca", value=filters.search, placeholder="Nome ou matricula")
base = filters.base
if view.can_view_all_bases:
    base_choices = [""] + view.base_options
    base = f2.selectbox(
        "Base", base_choices,
        index=base_choices.index(filters.base) if filters.base in base_choices else 0,
        format_func=lambda b: b or "Todas",
    )
status = f3.selectbox(
    "Status", status_values,
    index=status_values.index(filters.status) if filters.status in status_values else 0,
    format_func=lambda s: status_labels.get(s, s),
)
contract = f4.selectbox(
    "Contrato", list(ContractFilter),
    index=list(ContractFilter).index(filters.contract),
    format_func=lambda c: contract_labels[c],
)

update = FilterUpdate()
if search != filters.search:
    update.search = search
if base != filters.base:
    update.base = base
if status != filters.status:
    update.status = status
if contract != filters.contract:
    update.contract = contract
if update.model_dump(exclude_none=True):
    client.update_filters(update)
    st.rerun()

b1, b2, b3, _ = st.columns([1, 1, 1, 3])
if b1.button("So HE"):
    client.update_filters(FilterUpdate(status=ShiftStatus.OVERTIME_ACTIVE.value))
    st.rerun()
if b2.button("Em jornada"):
    client.update_filters(FilterUpdate(status=ShiftStatus.ON_SHIFT.value))
    st.rerun()
if b3.button("Limpar filtros"):
    client.reset_filters()
    st.rerun()

groups = st.multiselect("Grupo de funcao", GROUP_FILTER_OPTIONS, default=filters.groups)
changed = set(groups) ^ set(filters.groups)
if changed:
    # "todas" wins when it was just picked; otherwise toggle each concrete change.
    for group in (["todas"] if "todas" in set(groups) - set(filters.groups) else sorted(changed - {"todas"})):
        client.toggle_group(group)
    st.rerun()

s1, s2 = st.columns([3, 1])
columns = list(SortColumn)
sort_column = s1.selectbox(
    "Ordenar por", columns, index=columns.index(view.sort.column), format_func=lambda c: c.value,
)
flip = s2.button(f"Direcao: {view.sort.direction.value}")
if sort_column != view.sort.column or flip:
    client.select_sort(sort_column.value)
    st.rerun()


# --- Live data ---
def _render(current: DashboardView) -> None:
    tz = settings.DISPLAY_TIMEZONE
    if current.phase == ViewPhase.FETCH_ERROR and current.error:
        st.warning(f"Showing last loaded data. Refresh failed: {current.error}")

    st.caption(
        "Ultima atualizacao: "
        + (format_timestamp(current.last_refreshed, tz) if current.last_refreshed else "-")
    )
    m1, m2, m3, m4, m5 = st.columns(5)
    m1.metric("Registros", current.counts.total)
    m2.metric("Hora extra total", hours_to_hhmm(current.counts.overtime_total))
    m3.metric("HE ativa", current.counts.overtime_active)
    m4.metric("Em jornada", current.counts.on_shift)
    m5.metric("Finalizados", current.counts.finished)

    if not current.rows:
        st.info("Nenhum registro para os filtros selecionados.")
        return

    table = pd.DataFrame(
        [
            {
                "Matricula": r.employee_id or "-",
                "Nome": r.name or "-",
                "Base": r.base or "-",
                "Grupo": r.function_group.value,
                "Escala": format_pair(r.scheduled_start, r.scheduled_end, tz=tz),
                "Batida 1": format_pair(r.first_in, r.first_out, tz=tz),
                "Batida 2": format_pair(r.second_in, r.second_out, tz=tz),
                "Intervalo (min)": r.break_minutes,
                "Trabalhadas": hours_to_hhmm(r.worked_hours),
                "Previstas": hours_to_hhmm(r.expected_hours),
                "Hora extra": hours_to_hhmm(r.overtime_hours),
                "Status": r.status_label,
            }
            for r in current.rows
        ]
    )
    st.dataframe(table, use_container_width=True, hide_index=True)


@st.fragment(run_every=min(60.0, settings.REFRESH_INTERVAL_SECONDS))
def live_section() -> None:
    try:
        _render(client.get_dashboard())
    except APIError as e:
        st.error(f"Failed to load dashboard: {e.detail}")


live_section()
