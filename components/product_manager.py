"""
Product Manager Component
=========================
Modal dialog to add / delete catalog products
"""

import streamlit as st

from data.session import DashboardSession


@st.dialog("إدارة المنتجات")
def product_manager_dialog(session: DashboardSession):
    """Product manager modal dialog"""
    col1, col2 = st.columns([3, 1])
    with col1:
        new_product = st.text_input(
            "اسم المنتج الجديد",
            label_visibility="collapsed",
            placeholder="اسم المنتج الجديد",
            key="new_product_input",
        )
    with col2:
        if st.button("إضافة", type="primary", use_container_width=True):
            session.add_product(new_product)
            st.rerun(scope="fragment")

    st.markdown("---")

    pending = st.session_state.get('pending_product_delete')

    for product in session.products:
        col1, col2 = st.columns([3, 1])
        col1.write(product)

        if pending == product:
            # second click confirms
            if col2.button("تأكيد الحذف", key=f"confirm_delete_{product}", type="primary"):
                st.session_state.pending_product_delete = None
                session.delete_product(product)
                st.rerun(scope="fragment")
        elif col2.button("حذف", key=f"delete_{product}"):
            st.session_state.pending_product_delete = product
            st.rerun(scope="fragment")

    if pending:
        st.caption(f'هل أنت متأكد من حذف "{pending}"؟ ستبقى إحصائياته السابقة محفوظة.')

    if st.button("إغلاق", use_container_width=True):
        st.session_state.pending_product_delete = None
        st.rerun()
