import streamlit as st

from checklist_app.history import get_history
from checklist_app.visualizations import completion_chart, history_frame


def render_history_view(services):
    router = services.router
    session = router.session

    cols = st.columns([0.2, 0.8])
    if cols[0].button("← Kembali", key="history.back"):
        router.back()
        st.rerun()
    cols[1].markdown("<div class='section-title'>✨ Rekap Kegiatan ✨</div>", unsafe_allow_html=True)

    history = get_history(services.todos, session.user_id)
    if not session.active:
        return
    if not history:
        st.info("Belum ada riwayat kegiatan.")
        return

    frame = history_frame(history)
    st.plotly_chart(completion_chart(frame), use_container_width=True)

    for day in history:
        with st.expander(f"{day.date} · {day.completed_count}/{day.total_count} · {day.percentage}%"):
            for todo in day.todos:
                mark = "✅" if todo.completed else "⬜"
                kind = "wajib" if todo.is_mandatory else "tambahan"
                st.markdown(f"{mark} {todo.text} <span class='small-label'>({kind})</span>", unsafe_allow_html=True)
                if todo.image_url:
                    st.image(todo.image_url, width=160)
