# Developer tools for the Lox package.
