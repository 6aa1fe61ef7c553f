from datetime import timedelta

import pytest
from django.utils import timezone

from hubbackend.api.dashboard import day_bounds, summarize
from hubbackend.api.models import ChatgptChat, LeetcodeProblem, Note, Task

pytestmark = pytest.mark.django_db


def test_requires_session(anon):
    assert anon.get('/api/dashboard').status_code == 401


def test_empty_dashboard(api):
    assert api.get('/api/dashboard').json() == {
        'totalTasks': 0,
        'completedTasks': 0,
        'totalNotes': 0,
        'todaysTasks': [],
        'recentNotes': [],
        'recentLeetcode': [],
        'pinnedChats': [],
    }


def test_todays_tasks(user):
    start, end = day_bounds()
    undated = Task.objects.create(user=user, title='undated, created now')
    due_today = Task.objects.create(user=user, title='due today', dueDate=start + timedelta(minutes=1))
    Task.objects.create(user=user, title='due tomorrow', dueDate=end + timedelta(hours=1))
    stale = Task.objects.create(user=user, title='undated, created yesterday')
    Task.objects.filter(pk=stale.pk).update(createdAt=start - timedelta(hours=1))

    titles = {t['title'] for t in summarize(user)['todaysTasks']}
    assert titles == {undated.title, due_today.title}


def test_counts_and_recent_items(api, user, other_user):
    Task.objects.create(user=user, title='a', completed=True)
    Task.objects.create(user=user, title='b')
    Task.objects.create(user=other_user, title='not mine')
    notes = [Note.objects.create(user=user, title=f'note {i}') for i in range(7)]
    now = timezone.now()
    for i in range(4):
        LeetcodeProblem.objects.create(user=user, title=f'p{i}', link='https://leetcode.com/problems/p/',
                                       difficulty='EASY', lastVisited=now - timedelta(days=i))
    ChatgptChat.objects.create(user=user, title='pinned', link='https://chat.openai.com/c/1', isPinned=True)
    ChatgptChat.objects.create(user=user, title='loose', link='https://chat.openai.com/c/2')

    body = api.get('/api/dashboard').json()
    assert body['totalTasks'] == 2
    assert body['completedTasks'] == 1
    assert body['totalNotes'] == 7
    assert [n['title'] for n in body['recentNotes']] == [n.title for n in reversed(notes)][:5]
    assert set(body['recentNotes'][0]) == {'id', 'title', 'updatedAt'}
    assert [p['title'] for p in body['recentLeetcode']] == ['p0', 'p1', 'p2']
    assert [c['title'] for c in body['pinnedChats']] == ['pinned']


def test_reading_dashboard_has_no_side_effects(api, user):
    old = timezone.now() - timedelta(days=2)
    problem = LeetcodeProblem.objects.create(user=user, title='p', link='https://leetcode.com/problems/p/',
                                             difficulty='HARD', lastVisited=old)
    api.get('/api/dashboard')
    problem.refresh_from_db()
    assert problem.lastVisited == old
