import pytest

from clinical_dashboard.strings import snake_case_file_to_title_case


@pytest.mark.parametrize(
    "file_name, expected",
    [
        ("example_file_name.txt", "Example File Name"),
        ("another_example_file.rs", "Another Example File"),
        ("singleword", "Singleword"),
        ("", ""),
        ("file_with_multiple.parts.txt", "File With Multiple"),
        ("file_with_MiXeD.CaSE.txt", "File With Mixed"),
        ("file_without_Extension", "File Without Extension"),
    ],
)
def test_snake_case_file_to_title_case(file_name, expected):
    assert snake_case_file_to_title_case(file_name) == expected