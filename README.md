# clinical_dashboard

Builds the data behind a clinical review dashboard. It produces Plotly
figure data for action timelines and visual attention bar charts. It can
also read session folders from the local file system.

The package has no third-party dependencies.

## Installation

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## Modules

### `clinical_dashboard.config`

`PlotlyConfig.load(config_dir)` reads six files from a configuration
directory:

- `action-plot-stages.json`
- `action-groups.json`
- `action-group-icons.json`
- `action-plot-settings.json`
- `visual-attention-plot-settings.json`
- `team-member-filter-settings.json`

If a file is missing, is not valid JSON, or has the wrong shape, it raises
`ConfigError`.

`init_plot_config(path)` loads the configuration once for the whole process
and returns it. Afterwards `get_config()` returns the same object. The
errors are:

- `OSError` if the directory does not exist or cannot be loaded.
- `RuntimeError` on a second initialisation.

A `PlotlyConfig` has two lookup methods:

- `get_action_group_name(action_name)` matches the action name without
  regard to case. It falls back to `"default_group_name"`.
- `get_action_group_icon(group_name)` falls back to `"default"`.

`MissedActionsPlotSettings.calculate_y_max(count)` gives the lowest y value
that the missed-action rows reach.

### `clinical_dashboard.action_plot`

`ActionsPlotDataCollector(config)` gathers the pieces of the actions
timeline:

- performed and missed action series
- compression lines, added with `add_compression_line`
- stage shapes and annotations, kept in `collector.layout`
- action groups, made with `create_action_group` and
  `get_y_for_action_group`

`to_plot_data()` does the following, then returns an `ActionsPlotData`:

- sets the axis ranges and stage heights
- places the missed actions inside their stage rectangles
- adds the "Performed Actions" and "Missed Actions" headings

`ActionsPlotData.to_dict()` gives the JSON-ready form, with the keys
`data`, `layout` and `actionGroupIcons`.

### `clinical_dashboard.visual_attention_plot`

`to_plotly_data(reader, window_duration_secs, config)` reads a JSON array of
`{"time": ..., "category": ...}` samples. It returns one
`VisualAttentionCategory` bar trace per category.

- Traces come in the order of the configured colour map, and each one
  carries its colour.
- Categories that are not in the map are dropped.
- `VisualAttentionCategory.to_dict()` gives the JSON-ready form.

### `clinical_dashboard.visual_attention`

The steps behind that plot:

- `normalize_visual_attention_load_data` measures each sample's time from
  the first sample.
- `aggregate_category_ratios` and `process_visual_attention_data` yield
  `(category, window_end_date, ratio)` for consecutive windows.

### `clinical_dashboard.local_source`

`LocalFileDataSource(root_dir)` serves session folders named `MMDDYYYY`:

- `get_main_folder_list()` lists the folders oldest first. Folders with
  other names are dated 01/01/1970.
- `fetch_json_reader(file_id)` opens a file for binary reading.
- `fetch_csv_reader(folder)` opens the first `.csv` or `.txt` file in a
  folder.
- `fetch_json_file_map(folder, category, priority_list)` returns
  `(display name, file name)` pairs. Names in the priority list come first,
  in list order; the rest are sorted alphabetically.
- `stream_video(folder, range_header)` returns a `VideoStream`. It holds the
  whole file (status 200) or a single `bytes=start-end` range (status 206).

### `clinical_dashboard.paths`

Finds files on disk. `resolve_config_file_path(args, fallbacks)` looks in
this order and uses the first that resolves:

1. a `--config-file=` argument
2. the `MTEAM_DASHBOARD_BACKEND_CONFIG` environment variable
3. the fallback paths

### Helpers

- `clinical_dashboard.plotly_models`: the Plotly layout, shape, annotation,
  image, line and font models, and `to_plotly(value)`, which turns them into
  plain dictionaries.
- `clinical_dashboard.builders`: factories for images, compression lines,
  stage shapes and annotations.
- `clinical_dashboard.missed_actions`: row layout and coordinates for
  missed-action markers.
- `clinical_dashboard.dates`: `seconds_to_csv_row_time` and the `MMDDYYYY`
  parser `parse_date`.
- `clinical_dashboard.strings`: `snake_case_file_to_title_case`.
- `clinical_dashboard.jsonutil`: `parse_json_array_root`, which reads
  `NaN` as `null`.

## Example

```python
import io
from clinical_dashboard.config import init_plot_config
from clinical_dashboard.visual_attention_plot import to_plotly_data

config = init_plot_config("plot-config")
samples = io.StringIO('[{"time": 0, "category": "monitor"}, {"time": 3, "category": "patient"}]')
series = to_plotly_data(samples, config.visual_attention_plot_settings.window_size_secs, config)
figure_data = [category.to_dict() for category in series]
```

## What it does not do

- There is no web server or HTTP API. Nothing serves these figures or
  videos over the network.
- There is no command-line program.
- Only local folders can be used as a data source. The
  `DataSourceType.GOOGLE_DRIVE` value exists, but no source is provided for
  it.
- CSV action logs are not parsed. `fetch_csv_reader` only opens the file.
  The caller must feed action, missed-action, stage and CPR records into
  `ActionsPlotDataCollector`.
- Cognitive load data is not processed.