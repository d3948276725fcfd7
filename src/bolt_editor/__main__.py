"""Run the editor with ``python -m bolt_editor``."""

from bolt_editor.adapters.textual.app import main

if __name__ == "__main__":
    main()
