"""
Main entry point for the folio transcription editor.
"""
import curses

from folio import config, logger, ui
from folio.editor import EditorContext


def main(stdscr):
    # Raw mode so ctrl+s and friends reach the editor instead of the tty
    curses.raw()
    curses.set_escdelay(25)
    stdscr.keypad(True)
    ui.screen.init_colors()

    context = EditorContext(config.load_config())
    logger.log(f"Editor started in {context.navigator.directory}")

    # Main loop
    while not context.exit_flag:
        ui.screen.display(stdscr, context)
        key = ui.keys.read_key(stdscr)
        if key == "resize":
            continue
        ui.input.dispatch(context, key)


def run():
    """
    Simple convenience function to start the curses wrapper with main().
    curses.wrapper restores the terminal on exit, including when main() raises.
    """
    curses.wrapper(main)


if __name__ == "__main__":
    run()
