from shiny import ui as shiny_ui

from .modules.transaction_logs import transaction_logs_ui


app_ui = shiny_ui.page_navbar(
    shiny_ui.nav_panel("Transaction Logs", transaction_logs_ui()),
    title="txlens",
    id="main_nav",
)
