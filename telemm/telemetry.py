# -*- coding: utf-8 -*-
#
# telemetry.py
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

import logging
from typing import Iterable, List, Optional

import pandas as pd

from telemm.exceptions import InvalidTelemetry


logger = logging.getLogger(__name__)

TRACK_COLUMNS = ['PTT', 'Date', 'Time', 'Longitude', 'Latitude', 'Loc.Class']
DIVE_COLUMNS = ['DeployID', 'Day', 'Time', 'Depth']
SUMMARY_COLUMNS = ['DeployID', 't_0', 't_max', 'n_loc', 'res_m', 'n_day', 'max_n_loc', 'n_NA', 'p_NA']


def _require(df: pd.DataFrame, columns: Iterable[str], what: str):
    missing = [column for column in columns if column not in df.columns]
    if len(missing) > 0:
        raise InvalidTelemetry(f'{what} lacks columns {missing}')


def _timestamps(days: pd.Series, times: pd.Series) -> pd.Series:
    return pd.to_datetime(days.astype(str) + ' ' + times.astype(str), dayfirst=True)


def time_steps(df: pd.DataFrame) -> pd.Series:
    """Minutes until the next record of the same individual (NaN for the last one)."""
    following = df.groupby('DeployID')['time'].shift(-1)
    return (following - df['time']).dt.total_seconds() / 60.


def select_tracks(df: pd.DataFrame, ids: Iterable) -> pd.DataFrame:
    _require(df, ['DeployID'], 'Telemetry table')
    return df[df['DeployID'].isin(list(ids))].reset_index(drop=True)


def _finalize(df: pd.DataFrame, ids: Optional[Iterable]) -> pd.DataFrame:
    if ids is not None:
        df = select_tracks(df, ids)
    df = df.sort_values(['DeployID', 'time'], kind='mergesort').reset_index(drop=True)
    df['dt'] = time_steps(df)
    return df


def load_tracks(source, ids: Optional[Iterable] = None) -> pd.DataFrame:
    """Loads Argos locations.

    Timestamps are read day-first from the "Date" and "Time" columns and
    rounded to the minute. The tag identifier "PTT" becomes "DeployID".
    """
    df = pd.read_csv(source)
    _require(df, TRACK_COLUMNS, 'Location data')
    df['DeployID'] = df['PTT']
    df['time'] = _timestamps(df['Date'], df['Time']).dt.round('1min')
    df = _finalize(df, ids)
    logger.info(f'Loaded {len(df)} locations of {df["DeployID"].nunique()} individuals')
    return df[['DeployID', 'time', 'dt', 'Longitude', 'Latitude', 'Loc.Class']]


def load_dives(source, ids: Optional[Iterable] = None, skip_rows: int = 0) -> pd.DataFrame:
    """Loads a time series of depths, dropping the first `skip_rows` records."""
    df = pd.read_csv(source)
    _require(df, DIVE_COLUMNS, 'Dive data')
    df = df.iloc[skip_rows:].copy()
    df['time'] = _timestamps(df['Day'], df['Time'])
    df = _finalize(df, ids)
    logger.info(f'Loaded {len(df)} depth records of {df["DeployID"].nunique()} individuals')
    return df[['DeployID', 'time', 'Depth', 'dt']]


def frequent_intervals(df: pd.DataFrame, n: int = 10) -> pd.Series:
    """Most frequent positive time steps (in minutes) with their counts."""
    _require(df, ['dt'], 'Telemetry table')
    steps = df.loc[df['dt'] > 0, 'dt']
    return steps.value_counts().head(n)


def summarize(df: pd.DataFrame, res_m: float) -> pd.DataFrame:
    """Per-individual coverage of a regular time grid.

    Records with a non-positive time step (duplicated times) and the
    last record of each individual are left out. `max_n_loc` is the
    number of grid points of resolution `res_m` minutes between the
    first and last records, `p_NA` the proportion of them lacking data.
    """
    _require(df, ['DeployID', 'time', 'dt'], 'Telemetry table')
    if res_m <= 0:
        raise ValueError(f'Resolution must be positive, got {res_m}')
    step = pd.Timedelta(minutes=res_m)
    kept = df[df['dt'] > 0]
    rows = []
    for deploy_id, group in kept.groupby('DeployID', sort=True):
        t_0, t_max = group['time'].iloc[0], group['time'].iloc[-1]
        n_loc = len(group)
        max_n_loc = int((t_max - t_0) // step) + 1
        n_na = max_n_loc - n_loc
        if n_na < 0:
            logger.warning(f'Individual {deploy_id} has more records than a {res_m}-minute grid')
        rows.append({
            'DeployID': deploy_id,
            't_0': t_0,
            't_max': t_max,
            'n_loc': n_loc,
            'res_m': res_m,
            'n_day': group['time'].dt.round('1D').nunique(),
            'max_n_loc': max_n_loc,
            'n_NA': n_na,
            'p_NA': n_na / max_n_loc,
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def top_tags(summary: pd.DataFrame, n: int = 5) -> List:
    """Identifiers of the individuals with the smallest proportion of missing records."""
    _require(summary, ['DeployID', 'p_NA'], 'Summary table')
    ranked = summary.sort_values('p_NA', kind='mergesort')
    return ranked['DeployID'].head(n).tolist()
