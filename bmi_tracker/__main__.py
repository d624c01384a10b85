from bmi_tracker.cli import main

main()
