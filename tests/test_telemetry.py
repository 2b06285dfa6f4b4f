# -*- coding: utf-8 -*-
#
# test_telemetry.py
#
# Copyright 2022 Antoine Passemiers <antoine.passemiers@gmail.com>
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston,
# MA 02110-1301, USA.

import io

import numpy as np
import pandas as pd
import pytest
from numpy.testing import assert_array_almost_equal, assert_array_equal

from telemm import InvalidTelemetry
from telemm.telemetry import (
    frequent_intervals, load_dives, load_tracks, select_tracks, summarize, top_tags)


TRACKS = """PTT,Date,Time,Longitude,Latitude,Loc.Class
2,13/08/2017,10:00:20,-80.1,72.1,2
1,13/08/2017,10:10:00,-80.2,72.2,3
1,13/08/2017,10:00:00,-80.3,72.3,3
2,13/08/2017,10:20:00,-80.4,72.4,1
1,13/08/2017,10:40:00,-80.5,72.5,A
2,13/08/2017,10:20:00,-80.6,72.6,B
1,13/08/2017,11:00:00,-80.7,72.7,2
2,13/08/2017,10:30:00,-80.8,72.8,0
"""

DIVES = """DeployID,Day,Time,Depth
1,13/08/2017,09:58:45,3.5
1,13/08/2017,10:00:00,4.5
1,13/08/2017,10:01:15,12.0
2,13/08/2017,10:00:00,0.5
1,13/08/2017,10:02:30,30.5
"""


def tracks():
    return load_tracks(io.StringIO(TRACKS))


def test_load_tracks():
    df = tracks()
    assert list(df.columns) == ['DeployID', 'time', 'dt', 'Longitude', 'Latitude', 'Loc.Class']
    assert_array_equal(df['DeployID'], [1, 1, 1, 1, 2, 2, 2, 2])
    assert df['time'].iloc[0] == pd.Timestamp('2017-08-13 10:00:00')
    # Rounded to the minute
    assert df['time'].iloc[4] == pd.Timestamp('2017-08-13 10:00:00')
    assert_array_almost_equal(df['dt'].iloc[:3], [10., 30., 20.])
    assert np.isnan(df['dt'].iloc[3])
    assert_array_almost_equal(df['dt'].iloc[4:7], [20., 0., 10.])
    assert np.isnan(df['dt'].iloc[7])


def test_load_tracks_subset():
    df = load_tracks(io.StringIO(TRACKS), ids=[2])
    assert len(df) == 4
    assert set(df['DeployID']) == {2}
    assert len(select_tracks(tracks(), [1])) == 4


def test_load_dives():
    df = load_dives(io.StringIO(DIVES), skip_rows=1)
    assert list(df.columns) == ['DeployID', 'time', 'Depth', 'dt']
    assert_array_equal(df['DeployID'], [1, 1, 1, 2])
    assert_array_almost_equal(df['dt'].iloc[:2], [1.25, 1.25])
    assert df['Depth'].iloc[0] == 4.5


def test_missing_columns():
    with pytest.raises(InvalidTelemetry):
        load_tracks(io.StringIO('PTT,Date\n1,13/08/2017\n'))
    with pytest.raises(InvalidTelemetry):
        summarize(pd.DataFrame({'DeployID': [1]}), 10)


def test_frequent_intervals():
    counts = frequent_intervals(tracks())
    assert set(counts.index[:2]) == {10., 20.}
    assert counts.sum() == 5
    assert len(frequent_intervals(tracks(), n=1)) == 1


def test_summarize():
    summary = summarize(tracks(), res_m=10)
    assert list(summary['DeployID']) == [1, 2]
    first = summary.iloc[0]
    assert first['t_0'] == pd.Timestamp('2017-08-13 10:00:00')
    assert first['t_max'] == pd.Timestamp('2017-08-13 10:40:00')
    assert first['n_loc'] == 3
    assert first['max_n_loc'] == 5
    assert first['n_NA'] == 2
    assert first['p_NA'] == pytest.approx(0.4)
    assert first['n_day'] == 1
    second = summary.iloc[1]
    assert second['n_loc'] == 2
    assert second['max_n_loc'] == 3
    assert second['p_NA'] == pytest.approx(1. / 3.)
    with pytest.raises(ValueError):
        summarize(tracks(), res_m=0)


def test_top_tags():
    summary = summarize(tracks(), res_m=10)
    assert top_tags(summary) == [2, 1]
    assert top_tags(summary, n=1) == [2]
