import pytest

from hubbackend.api.models import Note, NotesFolder, Tag

pytestmark = pytest.mark.django_db

JSON = 'application/json'


def create(client, **body):
    return client.post('/api/notes', data=body, content_type=JSON)


def tag_names(note_id):
    return sorted(t.name for t in Note.objects.get(pk=note_id).tags.all())


def test_create_note_defaults(api, user):
    response = create(api, title='Ideas')
    assert response.status_code == 201
    body = response.json()
    assert body['content'] == ''
    assert body['folderId'] is None
    assert body['folder'] is None
    assert body['tags'] == []
    assert body['userId'] == user.id


def test_create_without_title_persists_nothing(api):
    response = create(api, content='# heading')
    assert response.status_code == 400
    assert response.json() == {'error': 'Title is required'}
    assert Note.objects.count() == 0


def test_tag_replacement_keeps_unused_tag_rows(api, user):
    note_id = create(api, title='n', tags=['a', 'b']).json()['id']
    assert tag_names(note_id) == ['a', 'b']

    body = api.put(f'/api/notes/{note_id}', data={'tags': ['b']}, content_type=JSON).json()
    assert [t['name'] for t in body['tags']] == ['b']
    assert tag_names(note_id) == ['b']
    assert Tag.objects.filter(user=user, name='a').exists()


def test_same_tag_name_reuses_one_row(api, user):
    first = create(api, title='one', tags=['python']).json()
    second = create(api, title='two', tags=['python']).json()
    api.post('/api/tasks', data={'title': 'task', 'tags': ['python']}, content_type=JSON)
    assert Tag.objects.filter(user=user, name='python').count() == 1
    assert first['tags'][0]['id'] == second['tags'][0]['id']


def test_tags_are_scoped_per_user(api, other_api, user, other_user):
    create(api, title='mine', tags=['shared'])
    create(other_api, title='theirs', tags=['shared'])
    assert Tag.objects.filter(name='shared').count() == 2
    assert Tag.objects.get(user=other_user).notes.get().title == 'theirs'


def test_invalid_tags_payload(api):
    response = create(api, title='n', tags='not-a-list')
    assert response.status_code == 400
    assert response.json()['error'].startswith('tags:')
    assert Note.objects.count() == 0


def test_get_update_delete(api):
    note_id = create(api, title='Draft', content='body').json()['id']

    body = api.get(f'/api/notes/{note_id}').json()
    assert body['title'] == 'Draft'

    body = api.put(f'/api/notes/{note_id}', data={'content': 'new body'}, content_type=JSON).json()
    assert body['title'] == 'Draft'
    assert body['content'] == 'new body'

    assert api.delete(f'/api/notes/{note_id}').json() == {'message': 'Note deleted successfully'}
    assert api.get(f'/api/notes/{note_id}').status_code == 404


def test_other_users_note_looks_missing(api, other_api):
    note_id = create(api, title='secret').json()['id']
    missing = other_api.get('/api/notes/nope')
    for response in (
        other_api.get(f'/api/notes/{note_id}'),
        other_api.put(f'/api/notes/{note_id}', data={'title': 'x'}, content_type=JSON),
        other_api.delete(f'/api/notes/{note_id}'),
    ):
        assert response.status_code == 404
        assert response.json() == missing.json() == {'error': 'Note not found'}
    assert Note.objects.get(pk=note_id).title == 'secret'


def test_folders_create_and_list(api, other_api):
    response = api.post('/api/folders', data={'name': 'Work'}, content_type=JSON)
    assert response.status_code == 201
    folder = response.json()
    assert folder['color'] == '#10B981'
    assert folder['noteCount'] == 0

    create(api, title='in folder', folderId=folder['id'])
    listed = api.get('/api/folders').json()
    assert [(f['name'], f['noteCount']) for f in listed] == [('Work', 1)]
    assert other_api.get('/api/folders').json() == []

    response = api.post('/api/folders', data={'color': '#000000'}, content_type=JSON)
    assert response.status_code == 400
    assert response.json() == {'error': 'Name is required'}


def test_note_folder_assignment(api, other_api):
    mine = api.post('/api/folders', data={'name': 'Mine'}, content_type=JSON).json()['id']
    theirs = other_api.post('/api/folders', data={'name': 'Theirs'}, content_type=JSON).json()['id']

    response = create(api, title='n', folderId=theirs)
    assert response.status_code == 400
    assert response.json() == {'error': 'Folder not found'}

    note = create(api, title='n', folderId=mine).json()
    assert note['folderId'] == mine
    assert note['folder']['name'] == 'Mine'

    # omitted folderId keeps the folder, null detaches it
    note = api.put(f"/api/notes/{note['id']}", data={'title': 'n2'}, content_type=JSON).json()
    assert note['folderId'] == mine
    note = api.put(f"/api/notes/{note['id']}", data={'folderId': None}, content_type=JSON).json()
    assert note['folderId'] is None


def test_folder_delete_detaches_notes(api, user):
    folder = NotesFolder.objects.create(user=user, name='Tmp')
    note = Note.objects.create(user=user, title='n', folder=folder)
    folder.delete()
    note.refresh_from_db()
    assert note.folder is None


def test_list_search_and_folder_filter(api):
    folder = api.post('/api/folders', data={'name': 'F'}, content_type=JSON).json()['id']
    create(api, title='Recipes', content='Pasta carbonara')
    in_folder = create(api, title='Trip', folderId=folder).json()['id']

    assert [n['title'] for n in api.get('/api/notes', {'search': 'CARBON'}).json()] == ['Recipes']
    assert [n['id'] for n in api.get('/api/notes', {'folderId': folder}).json()] == [in_folder]
    assert [n['title'] for n in api.get('/api/notes').json()] == ['Trip', 'Recipes']


def test_bad_tag_entries_are_validation_failures(api):
    response = create(api, title='n', tags=[None])
    assert response.status_code == 400
    assert response.json() == {'error': 'tags: This field may not be null.'}

    note_id = create(api, title='n', tags=['ok']).json()['id']
    response = api.put(f'/api/notes/{note_id}', data={'tags': ['ok', 'x' * 101]}, content_type=JSON)
    assert response.status_code == 400
    assert response.json()['error'].startswith('tags:')
    assert tag_names(note_id) == ['ok']
    assert Note.objects.count() == 1


def test_update_without_tags_key_keeps_tags(api):
    # only a PUT carrying ``tags`` replaces them
    note_id = create(api, title='n', tags=['a', 'b']).json()['id']
    api.put(f'/api/notes/{note_id}', data={'content': 'edited'}, content_type=JSON)
    assert tag_names(note_id) == ['a', 'b']
