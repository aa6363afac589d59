import pytest

from ossched.burst import Burst, BurstParseError, parse_burst_line, read_bursts
from ossched.msg import MAX_PAGES


def test_burst_only():
    assert parse_burst_line("250\n") == Burst(250)


def test_burst_and_block():
    assert parse_burst_line("100,50\n") == Burst(100, 50)


def test_burst_block_and_nice():
    assert parse_burst_line("100,50,-5\r\n") == Burst(100, 50, -5)


def test_pages_after_separator_text():
    burst = parse_burst_line("100,50,2, [3,7,9]\n")
    assert burst == Burst(100, 50, 2, (3, 7, 9))


def test_pages_directly_after_comma_are_not_read():
    burst = parse_burst_line("100,50,2,[3,7,9]\n")
    assert burst.pages == ()
    assert burst.nice == 2


def test_page_count_is_capped():
    pages = ",".join(str(n) for n in range(MAX_PAGES + 5))
    burst = parse_burst_line(f"10,0,0, [{pages}]")
    assert len(burst.pages) == MAX_PAGES
    assert burst.pages == tuple(range(MAX_PAGES))


def test_leading_spaces_in_number_accepted():
    assert parse_burst_line("100, 40") == Burst(100, 40)


def test_negative_block_time_wraps_to_unsigned():
    burst = parse_burst_line("100,-1")
    assert burst.block_time_ms == 2**32 - 1


@pytest.mark.parametrize(
    "line",
    ["", ",,,", "abc", "-1", "12x", "100 ,5", "2147483648", "100,5x",
     "100,5,n", "100,5,0, [1,-2]", "100,5,0, [1,z]"],
)
def test_malformed_lines_raise(line):
    with pytest.raises(BurstParseError):
        parse_burst_line(line)


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_burst_line("oops")


def test_read_bursts_skips_comments_blanks_and_bad_lines(tmp_path):
    path = tmp_path / "app.csv"
    path.write_text(
        "# burst,block\n"
        "\n"
        "   100,20\n"
        "bad,line\n"
        "300\n"
        "50,0,1, [4,5]\n"
    )
    assert read_bursts(path) == [
        Burst(100, 20),
        Burst(300),
        Burst(50, 0, 1, (4, 5)),
    ]


def test_read_bursts_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_bursts(tmp_path / "missing.csv")


def test_read_bursts_empty_file(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("# only a comment\n")
    assert read_bursts(path) == []