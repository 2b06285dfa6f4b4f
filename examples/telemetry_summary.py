import sys

from telemm.logging_config import setup_logging
from telemm.telemetry import frequent_intervals, load_dives, load_tracks, summarize, top_tags


setup_logging()

tracks = load_tracks(sys.argv[1])
print(frequent_intervals(tracks))
track_summary = summarize(tracks, res_m=10)
print(track_summary)
print(f'Based on location frequency, the top 5 tags are {top_tags(track_summary)}')

if len(sys.argv) > 2:
    dives = load_dives(sys.argv[2], ids=track_summary['DeployID'])
    print(frequent_intervals(dives))
    dive_summary = summarize(dives, res_m=1.25)
    print(dive_summary)
    print(f'Based on dive frequency, the top 5 tags are {top_tags(dive_summary)}')
