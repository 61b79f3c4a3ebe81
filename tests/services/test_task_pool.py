from sitecrawl.services.task_pool import TaskPool


def _partitions_of(pool, task_id):
    return [
        name
        for name, part in (
            ("open", pool.open),
            ("in_flight", pool.in_flight),
            ("done", pool.done),
            ("blacklisted", pool.blacklisted),
        )
        if task_id in part
    ]


def test_ids_start_at_zero_and_increase():
    pool = TaskPool()
    assert pool.get_or_create_id("http://h/") == 0
    assert pool.get_or_create_id("http://h/a") == 1
    assert pool.get_or_create_id("http://h/b") == 2


def test_same_url_yields_same_id():
    pool = TaskPool()
    first = pool.get_or_create_id("http://h/a")
    pool.get_or_create_id("http://h/b")
    assert pool.get_or_create_id("http://h/a") == first


def test_dedup_key_is_the_exact_string():
    pool = TaskPool()
    assert pool.get_or_create_id("http://h/a") != pool.get_or_create_id("http://h/a/")


def test_enqueue_from_two_parents_unions_referrers():
    pool = TaskPool()
    seed = pool.enqueue("http://h/")
    a = pool.enqueue("http://h/a", seed)
    c1 = pool.enqueue("http://h/c", seed)
    c2 = pool.enqueue("http://h/c", a)
    assert c1 == c2
    assert pool.get(c1).parent_ids == {seed, a}
    assert pool.count_open() == 3


def test_seed_has_no_parents():
    pool = TaskPool()
    seed = pool.enqueue("http://h/")
    assert pool.get(seed).parent_ids == set()


def test_enqueue_does_not_requeue_in_flight_or_done_tasks():
    pool = TaskPool()
    seed = pool.enqueue("http://h/")
    task = pool.take_open()
    assert pool.enqueue("http://h/", 7) == seed
    assert pool.count_open() == 0
    pool.mark_done(task)
    pool.enqueue("http://h/", 8)
    assert pool.count_open() == 0
    assert _partitions_of(pool, seed) == ["done"]
    # referrers still accumulate after the fetch
    assert task.parent_ids == {7, 8}


def test_take_open_moves_task_to_in_flight_in_discovery_order():
    pool = TaskPool()
    pool.enqueue("http://h/1")
    pool.enqueue("http://h/2")
    first = pool.take_open()
    assert first.url == "http://h/1"
    assert _partitions_of(pool, first.id) == ["in_flight"]
    assert pool.take_open().url == "http://h/2"
    assert pool.take_open() is None


def test_mark_done_moves_from_in_flight():
    pool = TaskPool()
    pool.enqueue("http://h/")
    task = pool.take_open()
    pool.mark_done(task)
    assert pool.count_in_flight() == 0
    assert pool.count_done() == 1
    assert pool.counts_for_limit() == (0, 1)


def test_blacklisted_task_recorded_once_with_all_referrers():
    pool = TaskPool()
    seed = pool.enqueue("http://h/")
    other = pool.enqueue("http://h/other", seed)
    b1 = pool.enqueue_blacklisted("http://h/admin/", seed)
    b2 = pool.enqueue_blacklisted("http://h/admin/", other)
    assert b1 == b2
    assert pool.count_blacklisted() == 1
    assert pool.get(b1).parent_ids == {seed, other}
    assert _partitions_of(pool, b1) == ["blacklisted"]


def test_all_tasks_covers_every_partition_in_id_order():
    pool = TaskPool()
    seed = pool.enqueue("http://h/")
    pool.enqueue("http://h/a", seed)
    pool.enqueue("http://h/b", seed)
    pool.enqueue_blacklisted("http://h/admin/", seed)
    done = pool.take_open()
    pool.mark_done(done)
    pool.take_open()  # left in flight

    tasks = pool.all_tasks()
    assert [t.id for t in tasks] == [0, 1, 2, 3]
    assert pool.count_all() == 4
    assert {t.url for t in tasks} == {"http://h/", "http://h/a", "http://h/b", "http://h/admin/"}


def test_separate_pools_have_independent_counters():
    first = TaskPool()
    second = TaskPool()
    first.get_or_create_id("http://h/x")
    first.get_or_create_id("http://h/y")
    assert second.get_or_create_id("http://h/z") == 0
