import pytest

from reelcut.core.project import (
    Clip,
    ClipKind,
    ClipProperties,
    MediaContent,
    Project,
    TextContent,
    Track,
    TrackKind,
    add_track,
    extend_duration,
    find_clip,
    remove_clip,
    seek,
    select_clip,
    selected_clip,
    set_track_muted,
    toggle_play,
    update_clip_properties,
    update_selected_clip_properties,
)
from reelcut.errors import (
    InvalidPropertyError,
    InvalidTimeError,
    TrackMembershipError,
    UnknownPropertyError,
)


def _project():
    a = Clip(id="a", track_id="v1", kind=ClipKind.VIDEO, name="a", start=0, duration=10,
             content=MediaContent("file:///a.mp4"))
    b = Clip(id="b", track_id="v1", kind=ClipKind.TEXT, name="title", start=3, duration=4,
             content=TextContent("Hello"))
    m = Clip(id="m", track_id="a1", kind=ClipKind.AUDIO, name="music", start=0, duration=30)
    return Project(
        tracks=(
            Track(id="v1", kind=TrackKind.VISUAL, clips=(a, b)),
            Track(id="a1", kind=TrackKind.AUDIO, clips=(m,)),
        ),
        duration=60,
    )


def test_new_project_skeleton():
    p = Project.new()
    assert [t.kind for t in p.tracks] == [TrackKind.VISUAL, TrackKind.AUDIO]
    assert p.tracks[0].id != p.tracks[1].id
    assert p.current_time == 0 and p.duration == 60
    assert p.selected_clip_id is None and not p.is_playing


def test_add_track_appends_visual():
    p = _project()
    p2 = add_track(p)
    assert len(p2.tracks) == 3
    assert p2.tracks[-1].kind is TrackKind.VISUAL
    assert p2.tracks[-1].clips == ()
    assert len(p.tracks) == 2  # input snapshot untouched


def test_update_properties_merges():
    p = _project()
    p2 = update_clip_properties(p, "b", {"opacity": 50, "positionX": 12})
    b = find_clip(p2, "b")
    assert b.properties.opacity == 50
    assert b.properties.position_x == 12
    assert b.properties.scale == 100
    assert b.start == 3 and b.text_content == "Hello"
    assert find_clip(p, "b").properties.opacity == 100


def test_update_unknown_clip_is_noop():
    p = _project()
    p2 = update_clip_properties(p, "missing", {"opacity": 10})
    assert p2 is p
    assert p2 == _project()


def test_update_unknown_property_raises():
    with pytest.raises(UnknownPropertyError):
        update_clip_properties(_project(), "a", {"brightness": 3})


def test_update_selected_clip_properties():
    p = _project()
    assert update_selected_clip_properties(p, {"volume": 5}) is p
    p2 = update_selected_clip_properties(select_clip(p, "m"), {"volume": 5})
    assert find_clip(p2, "m").properties.volume == 5


def test_select_and_find():
    p = select_clip(_project(), "b")
    assert p.selected_clip_id == "b"
    clip = selected_clip(p)
    assert clip == find_clip(_project(), "b")
    assert clip.id == "b" and clip.name == "title"


def test_select_dangling_id_tolerated():
    p = select_clip(_project(), "ghost")
    assert p.selected_clip_id == "ghost"
    assert selected_clip(p) is None
    assert select_clip(p, None).selected_clip_id is None


def test_find_clip_first_match_wins():
    dup1 = Clip(id="x", track_id="t1", kind=ClipKind.IMAGE, name="first", start=0, duration=1)
    dup2 = Clip(id="x", track_id="t2", kind=ClipKind.IMAGE, name="second", start=0, duration=1)
    p = Project(tracks=(Track(id="t1", clips=(dup1,)), Track(id="t2", clips=(dup2,))))
    assert find_clip(p, "x").name == "first"


def test_remove_clip_clears_selection():
    p = select_clip(_project(), "a")
    p2 = remove_clip(p, "a")
    assert find_clip(p2, "a") is None
    assert p2.selected_clip_id is None
    assert [c.id for c in p2.tracks[0].clips] == ["b"]
    assert remove_clip(p2, "a") is p2


def test_set_track_muted():
    p = set_track_muted(_project(), "v1", True)
    assert p.tracks[0].is_muted
    assert set_track_muted(p, "nope", True) is p


def test_seek_clamps_low_only():
    p = _project()
    assert seek(p, -5).current_time == 0
    assert seek(p, 500).current_time == 500


def test_toggle_play():
    p = toggle_play(_project())
    assert p.is_playing
    assert not toggle_play(p).is_playing


def test_extend_duration_never_shrinks():
    p = _project()
    assert extend_duration(p, 10, 5) is p
    assert extend_duration(p, 58, 5).duration == 63


def test_clip_validation():
    with pytest.raises(InvalidTimeError):
        Clip(id="c", track_id="t", kind=ClipKind.IMAGE, name="c", start=-1, duration=1)
    with pytest.raises(InvalidTimeError):
        Clip(id="c", track_id="t", kind=ClipKind.IMAGE, name="c", start=0, duration=0)
    with pytest.raises(TypeError):
        Clip(id="c", track_id="t", kind=ClipKind.TEXT, name="c", start=0, duration=1)


def test_track_membership_enforced():
    clip = Clip(id="c", track_id="other", kind=ClipKind.IMAGE, name="c", start=0, duration=1)
    with pytest.raises(TrackMembershipError):
        Track(id="t", clips=(clip,))
    assert Track(id="t").with_clip(clip).clips[0].track_id == "t"


def test_clip_payload_accessors():
    p = _project()
    assert find_clip(p, "a").media_src == "file:///a.mp4"
    assert find_clip(p, "a").text_content is None
    assert find_clip(p, "b").media_src is None
    assert find_clip(p, "b").end == 7


def test_dict_conversion_round_trip():
    p = update_clip_properties(select_clip(_project(), "a"), "a", {"rotation": 45})
    d = p.to_dict()
    assert d["tracks"][0]["kind"] == "visual"
    assert d["tracks"][0]["clips"][1]["text_content"] == "Hello"
    assert "content" not in d["tracks"][0]["clips"][0]
    assert Project.from_dict(d) == p


def test_properties_defaults():
    props = ClipProperties()
    assert (props.opacity, props.scale, props.rotation, props.volume, props.speed) == (
        100, 100, 0, 100, 1
    )


def test_property_values_coerced_and_clamped():
    p = update_clip_properties(
        _project(), "a", {"opacity": 150, "volume": -20, "scale": -3, "rotation": "45"}
    )
    props = find_clip(p, "a").properties
    assert (props.opacity, props.volume, props.scale) == (100.0, 0.0, 0.0)
    assert props.rotation == 45.0 and isinstance(props.rotation, float)


@pytest.mark.parametrize(
    "partial",
    [{"opacity": "abc"}, {"volume": None}, {"scale": float("nan")}, {"speed": 0}, {"speed": -1}],
)
def test_invalid_property_value_raises(partial):
    with pytest.raises(InvalidPropertyError) as excinfo:
        update_clip_properties(_project(), "a", partial)
    assert excinfo.value.name == next(iter(partial))
