from gpx_activities.cli import main

main()
