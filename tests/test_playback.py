"""Tests for the playback scheduler and speed presets."""

import pytest

from gridsearch.core import engine
from gridsearch.core.grid import clear_visualization, toggle_wall
from gridsearch.core.playback import PATH, VISITED, PlaybackScheduler, SpeedPreset, build_timeline
from gridsearch.core.types import AlgorithmKind, AlgorithmResult, DisplayTag, Grid


class TestSpeedPreset:
    """Named speed presets."""

    def test_intervals(self):
        assert [p.interval_ms for p in SpeedPreset] == [5, 15, 25, 50, 100]

    @pytest.mark.parametrize("name", ["veryFast", "very_fast", "VERY_FAST", "Very Fast", "very-fast"])
    def test_parse_names(self, name):
        assert SpeedPreset.parse(name) is SpeedPreset.VERY_FAST

    @pytest.mark.parametrize("bad", [25, 2.5, "warp", ""])
    def test_parse_refuses_numbers_and_unknowns(self, bad):
        with pytest.raises(ValueError):
            SpeedPreset.parse(bad)

    def test_faster_slower_clamp(self):
        assert SpeedPreset.NORMAL.faster() is SpeedPreset.FAST
        assert SpeedPreset.NORMAL.slower() is SpeedPreset.SLOW
        assert SpeedPreset.VERY_FAST.faster() is SpeedPreset.VERY_FAST
        assert SpeedPreset.VERY_SLOW.slower() is SpeedPreset.VERY_SLOW


class TestTimeline:
    """Shape of the event timeline."""

    def test_single_track_timing(self, open_3x3: Grid):
        result = engine.run(AlgorithmKind.BFS, open_3x3, open_3x3.start, open_3x3.end)
        events = build_timeline({result.kind: result}, SpeedPreset.NORMAL, multi_track=False)

        visited = [e for e in events if e.phase == VISITED]
        path = [e for e in events if e.phase == PATH]
        assert [e.due_ms for e in visited] == [25 * (i + 1) for i in range(9)]
        assert [e.due_ms for e in path] == [225 + 50 * (i + 1) for i in range(5)]
        assert [e.cell for e in visited] == result.visited
        assert [e.cell for e in path] == result.path
        assert all(e.channel is None for e in events)
        assert {e.tag for e in visited} == {DisplayTag.VISITED}
        assert {e.tag for e in path} == {DisplayTag.PATH}

    def test_tracks_interleave_by_step(self):
        a = AlgorithmResult(AlgorithmKind.DIJKSTRA, visited=[(0, 0), (0, 1), (0, 2)], path=[(0, 0), (0, 1)])
        b = AlgorithmResult(AlgorithmKind.ASTAR, visited=[(0, 0)], path=[])
        events = build_timeline({a.kind: a, b.kind: b}, SpeedPreset.FAST, multi_track=True)

        assert [(e.track, e.cell) for e in events] == [
            (AlgorithmKind.DIJKSTRA, (0, 0)),
            (AlgorithmKind.ASTAR, (0, 0)),
            (AlgorithmKind.DIJKSTRA, (0, 1)),
            (AlgorithmKind.DIJKSTRA, (0, 2)),
            (AlgorithmKind.DIJKSTRA, (0, 0)),
            (AlgorithmKind.DIJKSTRA, (0, 1)),
        ]
        assert [e.due_ms for e in events] == [15, 15, 30, 45, 75, 105]
        assert events[1].tag is DisplayTag.VISITED_ASTAR and events[1].channel == "astar"
        assert events[-1].tag is DisplayTag.PATH_DIJKSTRA and events[-1].channel == "dijkstra"

    def test_empty_result(self):
        empty = AlgorithmResult(AlgorithmKind.BFS)
        assert build_timeline({empty.kind: empty}, SpeedPreset.NORMAL, multi_track=False) == []


class TestScheduler:
    """Ticking, tag rules and cancellation."""

    def test_single_track_playback(self, open_3x3: Grid, fake_clock):
        result = engine.run(AlgorithmKind.BFS, open_3x3, open_3x3.start, open_3x3.end)
        sched = PlaybackScheduler(open_3x3, clock=fake_clock)
        calls = []
        handle = sched.schedule(result, SpeedPreset.NORMAL, on_event=lambda *a: calls.append(a))

        assert sched.tick() == 0
        fake_clock.advance_ms(25)
        assert sched.tick() == 1       # start cell: nothing repainted
        assert calls == []

        fake_clock.advance_ms(25)
        assert sched.tick() == 1
        assert calls == [(AlgorithmKind.BFS, (1, 0), DisplayTag.VISITED)]
        assert open_3x3.node((1, 0)).display is DisplayTag.VISITED

        fake_clock.advance_ms(175)     # rest of the visited phase
        assert sched.tick() == 7
        assert open_3x3.node((2, 2)).display is DisplayTag.END
        assert open_3x3.node((1, 1)).display is DisplayTag.VISITED
        assert sched.running

        fake_clock.advance_ms(250)     # path phase, 2x interval per step
        assert sched.tick() == 5
        assert handle.done and not sched.running
        for cell in [(1, 0), (2, 0), (2, 1)]:
            assert open_3x3.node(cell).display is DisplayTag.PATH
        assert open_3x3.node((0, 0)).display is DisplayTag.START
        assert open_3x3.node((0, 1)).display is DisplayTag.VISITED
        assert len(calls) == 10

    def test_visited_never_overwrites_walls(self, fake_clock):
        grid = Grid.create(1, 3)
        result = AlgorithmResult(AlgorithmKind.BFS, visited=[(0, 0), (0, 1)], path=[])
        grid.node((0, 1)).display = DisplayTag.PATH
        toggle_wall(grid, (0, 0))

        sched = PlaybackScheduler(grid, clock=fake_clock)
        sched.schedule(result, "fast")
        sched.flush()

        assert grid.node((0, 0)).display is DisplayTag.WALL
        assert grid.node((0, 1)).display is DisplayTag.PATH

    def test_flush(self, walled_grid: Grid, fake_clock):
        result = engine.run(AlgorithmKind.ASTAR, walled_grid, walled_grid.start, walled_grid.end)
        sched = PlaybackScheduler(walled_grid, clock=fake_clock)
        handle = sched.schedule(result, SpeedPreset.VERY_SLOW)

        assert sched.flush() == len(result.visited) + len(result.path)
        assert handle.done and handle.pending == 0
        assert sched.flush() == 0

    def test_cancel_handle(self, open_3x3: Grid, fake_clock):
        result = engine.run(AlgorithmKind.DIJKSTRA, open_3x3, open_3x3.start, open_3x3.end)
        sched = PlaybackScheduler(open_3x3, clock=fake_clock)
        handle = sched.schedule(result)

        handle.cancel()
        fake_clock.advance_ms(10_000)
        assert sched.tick() == 0
        assert handle.cancelled and handle.pending == 0
        assert all(n.display in (DisplayTag.EMPTY, DisplayTag.START, DisplayTag.END) for n in open_3x3)

    def test_schedule_cancels_previous(self, open_3x3: Grid, fake_clock):
        result = engine.run(AlgorithmKind.BFS, open_3x3, open_3x3.start, open_3x3.end)
        sched = PlaybackScheduler(open_3x3, clock=fake_clock)
        first = sched.schedule(result)
        second = sched.schedule(result)

        assert first.cancelled
        assert sched.active is second and not second.cancelled

    def test_new_run_leaves_no_stale_mutations(self, open_3x3: Grid, fake_clock):
        sched = PlaybackScheduler(open_3x3, clock=fake_clock)
        first_result = engine.run(AlgorithmKind.BFS, open_3x3, open_3x3.start, open_3x3.end)
        first = sched.schedule(first_result, SpeedPreset.NORMAL)
        fake_clock.advance_ms(60)
        sched.tick()
        fired_before = first.fired
        applied_before = list(first.applied)

        # second run starts while the first still has pending steps
        sched.cancel()
        clear_visualization(open_3x3)
        second_result = engine.run(AlgorithmKind.DFS, open_3x3, open_3x3.start, open_3x3.end)
        second = sched.schedule(second_result, SpeedPreset.NORMAL)
        fake_clock.advance_ms(10_000)
        sched.tick()

        assert first.fired == fired_before
        assert first.applied == applied_before
        assert all(ev.cell in second_result.visited for ev in second.applied)
        assert second.done
        painted = {n.cell for n in open_3x3 if n.display in (DisplayTag.VISITED, DisplayTag.PATH)}
        assert painted <= set(second_result.visited)
        for cell in [(0, 1), (1, 1), (0, 2), (1, 2)]:
            assert open_3x3.node(cell).display is DisplayTag.EMPTY

    def test_multi_track_uses_separate_channels(self, walled_grid: Grid, fake_clock):
        comparison = engine.compare([AlgorithmKind.DIJKSTRA, AlgorithmKind.ASTAR],
                                    walled_grid, walled_grid.start, walled_grid.end)
        results = {k: c.result for k, c in comparison.items()}
        sched = PlaybackScheduler(walled_grid, clock=fake_clock)
        seen_tracks = set()
        sched.schedule(results, SpeedPreset.VERY_FAST, on_event=lambda track, cell, tag: seen_tracks.add(track))
        fake_clock.advance_ms(10_000)
        sched.tick()

        assert seen_tracks == {AlgorithmKind.DIJKSTRA, AlgorithmKind.ASTAR}
        mid = walled_grid.node((2, 1))
        assert mid.overlays == {"dijkstra": DisplayTag.PATH_DIJKSTRA, "astar": DisplayTag.PATH_ASTAR}
        assert mid.display is DisplayTag.EMPTY
        for cell in results[AlgorithmKind.DIJKSTRA].visited:
            node = walled_grid.node(cell)
            if node.is_start or node.is_end:
                assert node.overlays == {}
            else:
                assert node.overlays["dijkstra"] in (DisplayTag.VISITED_DIJKSTRA, DisplayTag.PATH_DIJKSTRA)

    def test_rejects_numeric_speed(self, open_3x3: Grid):
        result = engine.run(AlgorithmKind.BFS, open_3x3, open_3x3.start, open_3x3.end)
        sched = PlaybackScheduler(open_3x3)
        with pytest.raises(ValueError):
            sched.schedule(result, 25)
