#===============================================================================
#  Iris_Application_Hub  |  Development Application Hub
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-19
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  A desktop hub for the projects you start every day. Each application is a
#  working directory plus an ordered list of commands (e.g. "npm install",
#  "npm run dev"). One click opens a terminal that runs them all; Stop closes
#  the terminal together with everything it started.
#  Supports:
#    - Run / Stop / Restart per application, Stop all
#    - Scripted answers for interactive scripts (setPath.bat -> "18.12.0")
#    - Live running/stopped status (terminals closed by hand are noticed)
#    - Import / export of the application list (JSON)
#
#  Folder Conventions
#  ------------------
#    %APPDATA%\iris\ (Windows) or ~/.config/iris/ (Linux, macOS)
#      - config.json                       -> configured applications
#      - icons/<name>-original.svg         -> optional technology icons
#      - logs/iris.log                     -> hub log
#
#  Copyright & License Notes
#  -------------------------
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#
#  This source code is provided "AS IS", without warranty of any kind, express
#  or implied, including but not limited to the warranties of merchantability,
#  fitness for a particular purpose, and noninfringement.
#
#  Permission Notice (Personal/Internal Use)
#  -----------------------------------------
#  You may use, copy, and modify this software for personal or internal use.
#  Redistribution or public release should include this header and credit the
#  author. If you plan to open-source this project, consider replacing this
#  section with an OSI-approved license (e.g., MIT) for clarity.
#
#  Third-Party Components
#  ----------------------
#  This project uses third-party libraries (PySide6, psutil) which are
#  licensed separately by their respective authors. Ensure compliance with
#  their license terms when distributing this software.
#===============================================================================

import sys

from irishub.app import main


if __name__ == "__main__":
    sys.exit(main())
