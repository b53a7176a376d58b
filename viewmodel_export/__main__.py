from viewmodel_export.cli import main

main()
