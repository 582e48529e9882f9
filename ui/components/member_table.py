import pandas as pd
import streamlit as st
from typing import Iterable

from domain.models import Member
from utils.dates import format_registration_date

COLUMNS = ["이름", "이메일", "가입일"]


def members_to_frame(members: Iterable[Member]) -> pd.DataFrame:
    """Rows in server order; the password is not part of Member and never shown."""
    rows = [
        {"이름": m.name, "이메일": m.email, "가입일": format_registration_date(m.registration_date)}
        for m in members
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def member_table(members: Iterable[Member]):
    st.dataframe(members_to_frame(members), hide_index=True, use_container_width=True)
