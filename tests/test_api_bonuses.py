"""
Tests for the bonus catalog pages and JSON API.

- GET /bonuses and /bonuses/<identifier> (storefront pages)
- GET /api/bonuses and /api/bonuses/<identifier>
"""


class TestBonusesAPIList:

    def test_list_empty(self, client):
        response = client.get('/api/bonuses')
        assert response.status_code == 200
        data = response.get_json()
        assert data['bonuses'] == []
        assert data['total'] == 0
        assert 'page' in data
        assert 'per_page' in data
        assert 'pages' in data

    def test_list_excludes_deleted(self, client, catalog, sample_bonus):
        gone = catalog.create_bonus(name='Gone', points=1)
        catalog.destroy_bonus(gone.id)

        data = client.get('/api/bonuses').get_json()
        assert data['total'] == 1
        assert data['bonuses'][0]['slug'] == 'reward-x'
        assert data['bonuses'][0]['available'] is True

    def test_list_pagination_params(self, client, catalog):
        for i in range(3):
            catalog.create_bonus(name=f'Reward {i}', points=10)

        data = client.get('/api/bonuses?page=2&per_page=2').get_json()
        assert data['page'] == 2
        assert data['per_page'] == 2
        assert [b['name'] for b in data['bonuses']] == ['Reward 2']


class TestBonusesAPIGet:

    def test_get_by_slug(self, client, sample_bonus):
        response = client.get('/api/bonuses/reward-x')
        assert response.status_code == 200
        data = response.get_json()
        assert data['id'] == sample_bonus.id
        assert data['points'] == 100
        assert data['description'] == 'A reward worth redeeming'
        assert data['slug_history'] == ['reward-x']

    def test_get_by_id(self, client, sample_bonus):
        response = client.get(f'/api/bonuses/{sample_bonus.id}')
        assert response.status_code == 200
        assert response.get_json()['slug'] == 'reward-x'

    def test_soft_deleted_is_not_found(self, client, catalog, sample_bonus):
        bonus_id = sample_bonus.id
        catalog.destroy_bonus(bonus_id)

        response = client.get(f'/api/bonuses/{bonus_id}')
        assert response.status_code == 404
        assert response.get_json()['error']['code'] == 'BONUS_NOT_FOUND'

    def test_unknown_slug(self, client):
        response = client.get('/api/bonuses/nothing-here')
        assert response.status_code == 404


class TestBonusPages:

    def test_index_renders_bonuses(self, client, catalog, sample_bonus):
        catalog.add_image(sample_bonus.id, 'https://cdn.example.com/x.png', alt='Reward X image')

        response = client.get('/bonuses')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert f'id="bonus_{sample_bonus.id}"' in html
        assert 'Reward X' in html
        assert 'https://cdn.example.com/x.png' in html
        assert 'href="/bonuses/reward-x"' in html

    def test_index_empty(self, client):
        response = client.get('/bonuses')
        assert response.status_code == 200
        assert 'No bonuses available.' in response.get_data(as_text=True)

    def test_index_rel_links(self, client, catalog):
        for i in range(3):
            catalog.create_bonus(name=f'Reward {i}', points=10)

        html = client.get('/bonuses?page=2&per_page=1').get_data(as_text=True)
        assert 'rel="prev"' in html
        assert 'rel="next"' in html

    def test_page_links_keep_per_page(self, client, catalog):
        for i in range(3):
            catalog.create_bonus(name=f'Reward {i}', points=10)

        html = client.get('/bonuses?page=2&per_page=1').get_data(as_text=True)
        assert '/bonuses?page=1&amp;per_page=1' in html
        assert '/bonuses?page=3&amp;per_page=1' in html

    def test_show_page(self, client, sample_bonus):
        response = client.get('/bonuses/reward-x')
        assert response.status_code == 200
        html = response.get_data(as_text=True)
        assert '<h1 class="bonus-title" itemprop="name">Reward X</h1>' in html
        assert 'content="100"' in html

    def test_show_deleted_is_404(self, client, catalog, sample_bonus):
        catalog.destroy_bonus(sample_bonus.id)
        assert client.get('/bonuses/reward-x').status_code == 404

    def test_long_names_truncated_in_listing(self, client, catalog):
        catalog.create_bonus(name='A' * 80, points=10)
        html = client.get('/bonuses').get_data(as_text=True)
        assert ('A' * 47) + '...' in html
