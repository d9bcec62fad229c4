import shopfloor.bootstrap_env  # must be first to set env/secrets
import streamlit as st

from shopfloor.config import DATA_SOURCES, PAGES
from shopfloor.data.loader import clear_cache
from shopfloor.ui.layout import setup_page, sidebar_navigation
from shopfloor.ui.pages import machine_status, wip, work_orders
from shopfloor.ui.pages.context import PageContext
from shopfloor.utils.log import get_logger

logger = get_logger("shopfloor.app")

PAGE_RENDERERS = {
    "machines_all": machine_status.render,
    "machines_lathes_millturn": machine_status.render,
    "machines_mill_4_5ax": machine_status.render,
    "machines_grinding": machine_status.render,
    "wip": wip.render,
    "quality": work_orders.render_quality,
    "mrb": work_orders.render_mrb,
}


def main() -> None:
    setup_page()
    page = sidebar_navigation(PAGES)

    if st.sidebar.button("🔄 Refresh Data"):
        clear_cache()
        logger.info("Snapshot cache cleared from the sidebar")

    renderer = PAGE_RENDERERS.get(page.key)
    if renderer is None:
        st.warning(f"No dashboard registered for {page.label}.")
        return

    context = PageContext(page=page, source=DATA_SOURCES[page.source])
    renderer(context)


if __name__ == "__main__":
    main()
