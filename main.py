from __future__ import annotations
from level_editor.log import setup_logging
from level_editor.editor.config import AppConfig
from level_editor.editor.app import MapEditorApp


def main():
    setup_logging()
    app = MapEditorApp(AppConfig())
    app.run()


if __name__ == "__main__":
    main()
