from conftest import ALIEN_ID, INCEPTION_ID


def test_list_movies(client, movies, alice):
    resp = client.get("/movies", headers=alice)
    assert resp.status_code == 200
    body = resp.json()
    assert [m["Title"] for m in body] == ["Alien", "Inception"]
    assert [m["_id"] for m in body] == [ALIEN_ID, INCEPTION_ID]


def test_list_movies_requires_token(client, movies):
    assert client.get("/movies").status_code == 401


def test_movie_by_title(client, movies, alice):
    resp = client.get("/movies/Inception", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {
        "_id": INCEPTION_ID,
        "Title": "Inception",
        "Description": "A thief steals secrets through dream-sharing.",
        "Genre": {"Name": "Thriller", "Description": "Suspense and tension."},
        "Director": {
            "Name": "Christopher Nolan",
            "Bio": "British-American filmmaker.",
            "Birth": "1970",
            "Death": None,
        },
        "ImagePath": "inception.png",
        "Featured": True,
    }


def test_movie_title_is_exact_match(client, movies, alice):
    assert client.get("/movies/inception", headers=alice).status_code == 404
    assert client.get("/movies/Incep", headers=alice).status_code == 404


def test_genre(client, movies, alice):
    resp = client.get("/movies/genre/Horror", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {"Name": "Horror", "Description": "Meant to frighten."}


def test_unknown_genre_is_404(client, movies, alice):
    resp = client.get("/movies/genre/Western", headers=alice)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Genre Western was not found."


def test_director(client, movies, alice):
    resp = client.get("/movies/directors/Christopher Nolan", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {
        "Name": "Christopher Nolan",
        "Bio": "British-American filmmaker.",
        "Birth": "1970",
        "Death": None,
    }


def test_unknown_director_is_404(client, movies, alice):
    assert client.get("/movies/directors/Nobody", headers=alice).status_code == 404
