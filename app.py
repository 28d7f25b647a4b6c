from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import pandas as pd
import streamlit as st

from hr_dashboard.data import load_dashboard_data, prepare_context
from hr_dashboard.errors import DashboardError
from hr_dashboard.filters import FILTER_KEYS
from hr_dashboard.jalali import PERSIAN_MONTHS, format_number_fa, to_persian_digits
from hr_dashboard.metrics_birthdays import compute_birthdays
from hr_dashboard.metrics_map import REGIONS, compute_map
from hr_dashboard.metrics_overtime import compute_overtime
from hr_dashboard.metrics_overview import compute_overview
from hr_dashboard.metrics_profile import compute_profile
from hr_dashboard.metrics_salary import compute_salary
from hr_dashboard.sample_data import generate_sample_data
from hr_dashboard.session import TABS, AppState, is_dashboard, load_data, logout, set_filter
from hr_dashboard.workbook import TEMPLATE_FILENAME, build_template_workbook, load_employee_workbook


FILTER_LABELS = {
    "gender": "جنسیت",
    "education": "مدرک تحصیلی",
    "department": "معاونت",
    "location": "محل فعالیت",
    "position": "جایگاه شغلی",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        body, .stApp {direction: rtl;}
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #334155;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;}
        .card {border: 1px solid #334155;border-radius: 12px;padding: 16px;margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;margin-bottom: 8px;}
        .kpi {text-align: center;}
        .kpi .kpi-label {color: #94a3b8;font-size: 0.85rem;}
        .kpi .kpi-value {font-size: 1.6rem;font-weight: 700;}
        .footer {color: #94a3b8;font-size: 0.85rem;text-align: center;margin-top: 16px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def kpi(col, label: str, value: str):
    col.markdown(
        f"<div class='kpi'><div class='kpi-label'>{label}</div><div class='kpi-value'>{value}</div></div>",
        unsafe_allow_html=True,
    )


def chart(spec: Optional[Dict[str, Any]]):
    if spec:
        st.vega_lite_chart(spec, use_container_width=True)
    else:
        st.info("داده‌ای برای نمایش وجود ندارد")


def get_state() -> AppState:
    if "app_state" not in st.session_state:
        st.session_state["app_state"] = AppState()
    return st.session_state["app_state"]


def put_state(state: AppState):
    st.session_state["app_state"] = state


# ---------- Upload page ----------
def render_upload_page(state: AppState):
    st.markdown("<div class='app-top-bar'><div class='page-title'>داشبورد منابع انسانی</div></div>", unsafe_allow_html=True)
    st.caption("فایل اکسل اطلاعات کارمندان را بارگذاری کنید یا با داده نمونه ادامه دهید.")

    uploaded = st.file_uploader("فایل اکسل", type=["xlsx", "xls"])
    if uploaded is not None:
        try:
            employees = load_employee_workbook(uploaded.name, uploaded.getvalue())
        except DashboardError as exc:
            st.error(exc.user_message)
        else:
            st.success(f"{to_persian_digits(len(employees))} رکورد بارگذاری شد")
            put_state(load_data(state, employees))
            st.rerun()

    c1, c2 = st.columns(2)
    if c1.button("مشاهده با داده نمونه"):
        put_state(load_data(state, generate_sample_data()))
        st.rerun()
    c2.download_button(
        "دانلود فایل نمونه",
        data=build_template_workbook(),
        file_name=TEMPLATE_FILENAME,
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )


# ---------- Tabs ----------
def render_overview(payload: Dict[str, Any]):
    labels = payload["kpi_labels"]
    cols = st.columns(6)
    kpi(cols[0], "تعداد معاونت", labels["departments"])
    kpi(cols[1], "تعداد پرسنل", labels["headcount"])
    kpi(cols[2], "میانگین حقوق", labels["avg_salary"])
    kpi(cols[3], "میانگین سابقه", labels["avg_tenure"])
    kpi(cols[4], "میانگین سن", labels["avg_age"])
    kpi(cols[5], "میانگین سابقه (تاریخ استخدام)", labels["avg_tenure_from_dates"])

    charts = payload["charts"]
    c1, c2 = st.columns(2)
    with c1:
        with card("رده سنی"):
            chart(charts.get("age_groups"))
        with card("معاونت"):
            chart(charts.get("department"))
    with c2:
        with card("جایگاه شغلی"):
            chart(charts.get("position"))
        with card("مدرک تحصیلی"):
            chart(charts.get("education"))
    d1, d2, d3 = st.columns(3)
    for col, key, title in ((d1, "gender", "جنسیت"), (d2, "marital_status", "وضعیت تاهل"), (d3, "location", "محل فعالیت")):
        with col:
            with card(title):
                chart(charts.get(key))


def render_birthdays(filters, ctx):
    choice = st.selectbox("ماه تولد", ["همه"] + list(PERSIAN_MONTHS))
    payload = compute_birthdays(filters, ctx, selected_month=None if choice == "همه" else choice)
    c1, c2 = st.columns(2)
    with c1:
        with card("تعداد تولد در هر ماه"):
            chart(payload["charts"].get("month_counts"))
    with c2:
        with card(payload["list_title"]):
            st.dataframe(pd.DataFrame(payload["employees"]), use_container_width=True, hide_index=True)


def render_salary(payload: Dict[str, Any]):
    charts = payload["charts"]
    with card("میانگین حقوق و تعداد پرسنل به تفکیک معاونت"):
        chart(charts.get("department"))
    c1, c2, c3 = st.columns(3)
    for col, key, title in ((c1, "position", "جایگاه شغلی"), (c2, "gender", "جنسیت"), (c3, "education", "مدرک تحصیلی")):
        with col:
            with card(f"میانگین حقوق به تفکیک {title}"):
                chart(charts.get(key))


def render_map(filters, ctx):
    choice = st.selectbox("منطقه", ["همه"] + REGIONS, format_func=lambda r: r if r == "همه" else to_persian_digits(r))
    payload = compute_map(filters, ctx, selected_region=None if choice == "همه" else choice)
    c1, c2 = st.columns(2)
    with c1:
        with card("نقشه پراکندگی پرسنل"):
            chart(payload["charts"].get("regions"))
    with c2:
        with card("لیست پرسنل"):
            st.dataframe(pd.DataFrame(payload["employees"]), use_container_width=True, hide_index=True)


def render_profile(filters, ctx):
    base = compute_profile(filters, ctx)
    if base["employee"] is None:
        st.info("هیچ کارمندی یافت نشد")
        return
    options: List[Dict[str, Any]] = base["options"]
    names = {o["id"]: o["full_name"] or o["id"] for o in options}
    selected = st.selectbox("نام و نام خانوادگی", list(names), format_func=names.get)
    payload = compute_profile(filters, ctx, employee_id=selected)

    cols = st.columns(4)
    for i, item in enumerate(payload["info"]):
        kpi(cols[i % 4], item["label"], item.get("display") or str(item["value"] if item["value"] is not None else "-"))

    c1, c2, c3 = st.columns(3)
    with c1:
        with card("وضعیت ارزشیابی"):
            gauge = payload["gauge"]
            st.progress(min(max(gauge["percent"], 0), 100) / 100, text=format_number_fa(gauge["value"]))
    with c2:
        with card("به تفکیک امتیازدهندگان"):
            chart(payload["charts"].get("raters"))
    with c3:
        with card("میزان اضافه کاری"):
            kpi(st, "ساعت", format_number_fa(payload["overtime_hours"]))
    with card("به تفکیک معیارهای ارزیابی"):
        chart(payload["charts"].get("criteria"))


def render_overtime(payload: Dict[str, Any]):
    cols = st.columns(2)
    kpi(cols[0], "مجموع اضافه کاری", format_number_fa(payload["kpis"]["total_overtime"]))
    kpi(cols[1], "میانگین اضافه کاری", format_number_fa(payload["kpis"]["avg_overtime"], decimals=1))
    c1, c2 = st.columns(2)
    with c1:
        with card("میانگین حقوق پرداختی و قراردادی"):
            chart(payload["charts"].get("salary"))
    with c2:
        with card("ساعات اضافه کاری به تفکیک معاونت"):
            chart(payload["charts"].get("hours"))
    st.dataframe(pd.DataFrame(payload["departments"]), use_container_width=True, hide_index=True)


# ---------- Dashboard ----------
def render_dashboard(state: AppState):
    data_ctx = load_dashboard_data(state.employees or ())
    options = data_ctx["options"]

    with st.sidebar:
        st.markdown("### فیلترها")
        for key in FILTER_KEYS:
            current = [v for v in getattr(state.filters, key) if v in options[key]]
            picked = st.multiselect(FILTER_LABELS[key], options=options[key], default=current, key=f"filter_{key}")
            if tuple(picked) != getattr(state.filters, key):
                state = set_filter(state, key, picked)
        put_state(state)
        st.markdown("---")
        if st.button("خروج"):
            put_state(logout(state))
            st.rerun()

    ctx = prepare_context(state.filters, data_ctx)
    filters = ctx["filters"]
    st.markdown("<div class='app-top-bar'><div class='page-title'>داشبورد منابع انسانی</div></div>", unsafe_allow_html=True)

    tabs = st.tabs(list(TABS.values()))
    with tabs[0]:
        render_overview(compute_overview(filters, ctx))
    with tabs[1]:
        render_birthdays(filters, ctx)
    with tabs[2]:
        render_salary(compute_salary(filters, ctx))
    with tabs[3]:
        render_map(filters, ctx)
    with tabs[4]:
        render_profile(filters, ctx)
    with tabs[5]:
        render_overtime(compute_overtime(filters, ctx))

    st.markdown(
        f"<div class='footer'>نمایش {to_persian_digits(ctx['shown'])} از {to_persian_digits(ctx['total'])} رکورد</div>",
        unsafe_allow_html=True,
    )


# ---------- UI setup ----------
st.set_page_config(page_title="داشبورد منابع انسانی", layout="wide")
inject_base_styles()

app_state = get_state()
if is_dashboard(app_state):
    render_dashboard(app_state)
else:
    render_upload_page(app_state)
