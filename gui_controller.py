import time
import dearpygui.dearpygui as dpg


def _make_callbacks(shared):
    def tear_cb():
        shared['tear_mode'] = True
    def pause_cb():
        shared['toggle_pause'] = True
    def reset_cb():
        shared['reset_world'] = True
    def save_cb():
        shared['save'] = True
    def load_cb():
        shared['load'] = True
    def exit_cb():
        shared['__exit__'] = True
    return tear_cb, pause_cb, reset_cb, save_cb, load_cb, exit_cb


def run_gui(shared):
    """
    Run DearPyGui in its own process. Writes requests into `shared`; the
    pygame loop consumes them between frames.
    """
    dpg.create_context()

    tear_cb, pause_cb, reset_cb, save_cb, load_cb, exit_cb = _make_callbacks(shared)

    with dpg.window(label="Cloth Controls", tag="controls_window", width=380, height=260):
        dpg.add_text("Interaction (next drag only)")
        dpg.add_button(label="Tear on next drag", callback=lambda s, a, u: tear_cb())
        dpg.add_separator()
        dpg.add_button(label="Pause / Toggle", callback=lambda s, a, u: pause_cb())
        dpg.add_button(label="Reset Cloth", callback=lambda s, a, u: reset_cb())
        dpg.add_button(label="Save Snapshot", callback=lambda s, a, u: save_cb())
        dpg.add_button(label="Load Snapshot", callback=lambda s, a, u: load_cb())
        dpg.add_button(label="Exit", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")

    dpg.create_viewport(title='Cloth Controls', width=400, height=300)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            dpg.set_value("status_text", str(shared.get('status', '')))
            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    finally:
        dpg.destroy_context()
