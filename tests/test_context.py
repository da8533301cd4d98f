from services.school_directory.context import build_directory


async def test_local_mode_without_database_settings(tmp_path):
    directory = build_directory(database_url="", database_key="", storage_dir=str(tmp_path))
    await directory.start()

    assert directory.data.mode == "local"
    assert len(directory.data.schools) == 5
    await directory.close()


async def test_url_without_key_stays_local(tmp_path):
    directory = build_directory(
        database_url=f"sqlite:///{tmp_path / 'x.db'}", database_key="  ", storage_dir=str(tmp_path),
    )
    assert directory.data.mode == "local"


async def test_remote_mode_with_url_and_key(tmp_path):
    directory = build_directory(
        database_url=f"sqlite:///{tmp_path / 'x.db'}", database_key="anon-key", storage_dir=str(tmp_path),
    )
    await directory.start()

    assert directory.data.mode == "remote"
    # Tables were never created
    assert "no such table" in directory.data.last_error
    await directory.close()


async def test_sessions_share_the_data_store(tmp_path):
    directory = build_directory(database_url="", database_key="", storage_dir=str(tmp_path))
    await directory.start()

    first = directory.session_for("a")
    first.login("yuki.sato@example.com", "password123")

    assert directory.session_for("a").is_authenticated
    assert not directory.session_for("b").is_authenticated
    assert first.data is directory.session_for("b").data


async def test_unreachable_database_still_starts(tmp_path):
    directory = build_directory(
        database_url="postgresql://app@127.0.0.1:1/directory", database_key="key", storage_dir=str(tmp_path),
    )

    await directory.start()

    assert directory.data.mode == "remote"
    assert directory.data.last_error
    assert directory.data.schools == ()
    await directory.close()
