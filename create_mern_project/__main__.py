"""Allow ``python -m create_mern_project [name]``."""

from create_mern_project.pipeline import main

main()
