"""
Application Initialization
==========================
This module wires the preview state, the mesh generator and the main window
together and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Global Data Model (PreviewState).
2. Instantiates the Main Window (View).
3. Passes the Model into the View so they can communicate.
"""
import argparse
import logging
import sys
from typing import List, Optional

from insolepreview.logging_config import setup_logging
from insolepreview.model.state import InsoleParameters


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="insolepreview", description="Parametric insole preview")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument(
        "--summary", action="store_true",
        help="Build one mesh from --width/--length/--thickness, print its size and exit (no GUI)",
    )
    parser.add_argument("--width", type=float, default=InsoleParameters.width)
    parser.add_argument("--length", type=float, default=InsoleParameters.length)
    parser.add_argument("--thickness", type=float, default=InsoleParameters.thickness)
    parser.add_argument("--relief", action="store_true", help="Sculpt the detailed relief")
    return parser.parse_args(argv)


def print_summary(args: argparse.Namespace) -> int:
    from insolepreview.controller.pipeline import InsoleGenerator

    params = InsoleParameters(
        width=args.width, length=args.length, thickness=args.thickness, detailed_relief=args.relief
    )
    result = InsoleGenerator(cache_size=0).try_generate(params)
    if not result.ok:
        print(f"error: {result.error}", file=sys.stderr)
        return 2

    mesh = result.mesh
    x_min, x_max, y_min, y_max, z_min, z_max = mesh.bounds()
    print(f"vertices: {mesh.n_vertices}")
    print(f"faces:    {mesh.n_faces}")
    print(f"x: [{x_min:.4f}, {x_max:.4f}]  y: [{y_min:.4f}, {y_max:.4f}]  z: [{z_min:.4f}, {z_max:.4f}]")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    if args.summary:
        sys.exit(print_summary(args))

    # Qt is only needed for the interactive preview
    from PySide6.QtWidgets import QApplication

    from insolepreview.model.state import PreviewState
    from insolepreview.view.main_window import MainWindow

    # 2. Create the Qt Application
    app = QApplication(sys.argv[:1])
    app.setApplicationName("Insole Preview")

    # 3. Initialize the Data Model
    state = PreviewState(
        parameters=InsoleParameters(
            width=args.width, length=args.length, thickness=args.thickness, detailed_relief=args.relief
        )
    )

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(state)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
