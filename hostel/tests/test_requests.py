import pytest
from django.urls import reverse

from hostel.models import Complaint, LateEntryRequest, LaundryRequest, LeaveRequest
from hostel.tests.helpers import book

pytestmark = pytest.mark.django_db


# ---------------------------------------------------------------------
# Complaints
# ---------------------------------------------------------------------
def test_complaint_with_location(small_hostel, student_client, student):
    r = student_client.post(reverse('complaint_submit'), {
        'category': 'Room Maintenance', 'description': 'Fan is broken',
        'floorId': 'floor-1', 'roomId': 'room-2',
    }, format='json')
    assert r.status_code == 201
    data = r.data['data']
    assert data['status'] == 'Pending'
    assert data['location']['roomName'] == 'Room 2'
    assert data['userName'] == 'Asha Rao'


def test_complaint_requires_category_and_description(small_hostel, student_client):
    r = student_client.post(reverse('complaint_submit'), {'category': '', 'description': 'x'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Please fill in all required fields.'
    r = student_client.post(reverse('complaint_submit'), {'category': 'Cleanliness'}, format='json')
    assert r.data['error']['message'] == 'Please fill in all required fields.'


def test_complaint_rejects_unknown_category(small_hostel, student_client):
    r = student_client.post(reverse('complaint_submit'), {'category': 'Wifi', 'description': 'slow'}, format='json')
    assert r.status_code == 400


def test_complaint_room_must_be_on_floor(small_hostel, student_client):
    r = student_client.post(reverse('complaint_submit'), {
        'category': 'Cleanliness', 'description': 'Dusty', 'floorId': 'floor-2', 'roomId': 'room-1',
    }, format='json')
    assert r.status_code == 404


def test_complaint_room_needs_its_floor(small_hostel, student_client):
    r = student_client.post(reverse('complaint_submit'), {
        'category': 'Cleanliness', 'description': 'Dusty', 'roomId': 'room-1',
    }, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Select the floor of the room.'
    assert 'floorId' in r.data['error']['fields']
    assert not Complaint.objects.exists()


def test_admin_lists_and_resolves_complaints(small_hostel, student_client, admin_client):
    for text in ('first', 'second'):
        student_client.post(reverse('complaint_submit'), {'category': 'Other', 'description': text}, format='json')
    data = admin_client.get(reverse('admin_complaint_list')).data['data']
    assert [c['description'] for c in data] == ['second', 'first']

    r = admin_client.post(reverse('admin_complaint_resolve', args=[data[0]['id']]))
    assert r.status_code == 200
    assert r.data['data']['status'] == 'Resolved'
    assert r.data['data']['resolvedAt']
    again = admin_client.post(reverse('admin_complaint_resolve', args=[data[0]['id']]))
    assert again.status_code == 409

    pending = admin_client.get(reverse('admin_complaint_list'), {'status': 'Pending'}).data['data']
    assert [c['description'] for c in pending] == ['first']
    mine = student_client.get(reverse('complaint_mine')).data['data']
    assert len(mine) == 2


# ---------------------------------------------------------------------
# Feedback
# ---------------------------------------------------------------------
@pytest.mark.parametrize('rating', [None, 0])
def test_feedback_needs_a_star_rating(student_client, rating):
    payload = {'category': 'Room Quality'}
    if rating is not None:
        payload['rating'] = rating
    r = student_client.post(reverse('feedback_submit'), payload, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Please provide a star rating.'


def test_feedback_needs_a_category(student_client):
    r = student_client.post(reverse('feedback_submit'), {'rating': 4, 'category': ''}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Please select a category.'


def test_feedback_average(student_client, admin_client):
    for rating in (5, 4, 4):
        r = student_client.post(reverse('feedback_submit'), {'rating': rating, 'category': 'Facilities'},
                                format='json')
        assert r.status_code == 201
    r = admin_client.get(reverse('admin_feedback_list'))
    assert r.status_code == 200
    assert len(r.data['data']) == 3
    assert r.data['averageRating'] == 4.3


def test_feedback_list_is_admin_only(student_client):
    assert student_client.get(reverse('admin_feedback_list')).status_code == 403


# ---------------------------------------------------------------------
# Laundry
# ---------------------------------------------------------------------
def test_laundry_defaults_to_booked_room(small_hostel, student, student_client):
    book(student, 5, floor_number=2)
    r = student_client.post(reverse('laundry_submit'), {
        'numberOfClothes': 7, 'laundryNumber': 'L-12', 'bagNumber': 'B-3',
    }, format='json')
    assert r.status_code == 201
    assert r.data['data']['room']['roomId'] == 'room-5'
    assert r.data['data']['status'] == 'Pending'


def test_laundry_without_booking_needs_location(small_hostel, student_client):
    r = student_client.post(reverse('laundry_submit'), {
        'numberOfClothes': 2, 'laundryNumber': 'L-1', 'bagNumber': 'B-1',
    }, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Please fill in all fields.'


def test_laundry_room_must_exist(small_hostel, student_client):
    r = student_client.post(reverse('laundry_submit'), {
        'floorId': 'floor-1', 'roomId': 'room-9', 'numberOfClothes': 2, 'laundryNumber': 'L-1', 'bagNumber': 'B-1',
    }, format='json')
    assert r.status_code == 404
    assert r.data['error']['message'] == 'Selected room or floor not found.'


def test_laundry_needs_at_least_one_item(small_hostel, student_client):
    r = student_client.post(reverse('laundry_submit'), {
        'floorId': 'floor-1', 'roomId': 'room-1', 'numberOfClothes': 0, 'laundryNumber': 'L-1', 'bagNumber': 'B-1',
    }, format='json')
    assert r.status_code == 400


def test_laundry_status_chain(small_hostel, student_client, admin_client):
    created = student_client.post(reverse('laundry_submit'), {
        'floorId': 'floor-1', 'roomId': 'room-1', 'numberOfClothes': 3, 'laundryNumber': 'L-1', 'bagNumber': 'B-1',
    }, format='json').data['data']
    url = reverse('admin_laundry_status', args=[created['id']])

    assert admin_client.post(url, {'status': 'Processing'}, format='json').status_code == 200
    assert admin_client.post(url, {'status': 'Processing'}, format='json').status_code == 409
    r = admin_client.post(url, {'status': 'Completed'}, format='json')
    assert r.status_code == 200
    assert LaundryRequest.objects.get(pk=created['id']).status == 'Completed'
    assert admin_client.post(url, {'status': 'Processing'}, format='json').status_code == 409

    listed = admin_client.get(reverse('admin_laundry_list'), {'status': 'Completed'}).data['data']
    assert [x['id'] for x in listed] == [created['id']]
    assert student_client.get(reverse('laundry_mine')).data['data'][0]['status'] == 'Completed'


def test_laundry_can_complete_straight_from_pending(small_hostel, student_client, admin_client):
    created = student_client.post(reverse('laundry_submit'), {
        'floorId': 'floor-1', 'roomId': 'room-1', 'numberOfClothes': 3, 'laundryNumber': 'L-1', 'bagNumber': 'B-1',
    }, format='json').data['data']
    r = admin_client.post(reverse('admin_laundry_status', args=[created['id']]), {'status': 'Completed'},
                          format='json')
    assert r.status_code == 200


# ---------------------------------------------------------------------
# Late entry and leave
# ---------------------------------------------------------------------
def test_late_entry_return_must_follow_departure(student_client):
    r = student_client.post(reverse('late_entry_submit'), {
        'departureTime': '2024-05-01T20:00:00Z', 'expectedReturnTime': '2024-05-01T20:00:00Z', 'reason': 'Concert',
    }, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Return time must be after departure time.'


def test_late_entry_requires_all_fields(student_client):
    r = student_client.post(reverse('late_entry_submit'), {'departureTime': '2024-05-01T20:00:00Z'}, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Please fill in all fields.'


def test_late_entry_decision_flow(student_client, admin_client):
    r = student_client.post(reverse('late_entry_submit'), {
        'departureTime': '2024-05-01T20:00:00Z', 'expectedReturnTime': '2024-05-01T23:30:00Z', 'reason': 'Concert',
    }, format='json')
    assert r.status_code == 201
    request_id = r.data['data']['id']

    pending = admin_client.get(reverse('admin_late_entry_list'), {'status': 'Pending'}).data['data']
    assert [x['id'] for x in pending] == [request_id]

    r = admin_client.post(reverse('admin_late_entry_approve', args=[request_id]))
    assert r.status_code == 200
    assert r.data['data']['status'] == 'Approved'
    assert LateEntryRequest.objects.get(pk=request_id).decided_at is not None
    assert admin_client.post(reverse('admin_late_entry_reject', args=[request_id])).status_code == 409
    assert student_client.get(reverse('late_entry_mine')).data['data'][0]['status'] == 'Approved'


def test_leave_return_must_follow_departure(student_client):
    r = student_client.post(reverse('leave_submit'), {
        'departureDateTime': '2024-05-03T08:00:00Z', 'returnDateTime': '2024-05-01T08:00:00Z',
        'placeOfVisit': 'Home', 'reason': 'Festival',
    }, format='json')
    assert r.status_code == 400
    assert r.data['error']['message'] == 'Return date and time must be after departure.'


def test_leave_decision_flow(student_client, admin_client):
    r = student_client.post(reverse('leave_submit'), {
        'departureDateTime': '2024-05-01T08:00:00Z', 'returnDateTime': '2024-05-03T18:00:00Z',
        'placeOfVisit': 'Home', 'reason': 'Festival',
    }, format='json')
    assert r.status_code == 201
    request_id = r.data['data']['id']
    assert r.data['data']['placeOfVisit'] == 'Home'

    r = admin_client.post(reverse('admin_leave_reject', args=[request_id]))
    assert r.status_code == 200
    assert LeaveRequest.objects.get(pk=request_id).status == 'Rejected'
    rejected = admin_client.get(reverse('admin_leave_list'), {'status': 'Rejected'}).data['data']
    assert [x['id'] for x in rejected] == [request_id]
    assert admin_client.get(reverse('admin_leave_list'), {'status': 'Bogus'}).status_code == 400


def test_students_cannot_decide_passes(student_client):
    assert student_client.post(reverse('admin_leave_approve', args=[1])).status_code == 403
    assert student_client.post(reverse('admin_late_entry_approve', args=[1])).status_code == 403
    assert not Complaint.objects.exists()
