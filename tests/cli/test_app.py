from unittest.mock import MagicMock, patch


class TestBuildServices:
    @patch("couture.cli.app.get_storage")
    @patch("couture.cli.app.get_bill_repository")
    def test_returns_bill_service(self, mock_bill_repo, mock_storage):
        from couture.cli.app import _build_services
        from couture.services.bill_service import BillService

        service = _build_services()
        assert isinstance(service, BillService)
        assert service.bill_repo is mock_bill_repo.return_value
        assert service.storage is mock_storage.return_value

    @patch("couture.cli.app.settings")
    @patch("couture.cli.app.get_storage")
    @patch("couture.cli.app.get_bill_repository")
    def test_bank_details_only_when_configured(self, mock_bill_repo, mock_storage, mock_settings):
        from couture.cli.app import _build_services

        mock_settings.business_name = "Swetha's Couture"
        mock_settings.bank_account_name = "Swetha"
        mock_settings.bank_account_number = ""
        mock_settings.bank_ifsc = ""
        mock_settings.bank_name = ""
        assert _build_services().bank_details is None

        mock_settings.bank_account_number = "123456"
        mock_settings.bank_ifsc = "HDFC0001"
        service = _build_services()
        assert service.bank_details.ifsc == "HDFC0001"
        assert service.business_name == "Swetha's Couture"


class TestMainMenu:
    @patch("couture.cli.app._build_services")
    @patch("couture.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from couture.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called_once()

    @patch("couture.cli.app._build_services")
    @patch("couture.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from couture.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("couture.cli.app._build_services")
    @patch("couture.cli.app.questionary")
    @patch("couture.cli.app.list_bills_menu")
    def test_list_bills(self, mock_list, mock_q, mock_build):
        from couture.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.side_effect = ["List Bills", "Exit"]

        main_menu()
        mock_list.assert_called_once_with(mock_build.return_value)

    @patch("couture.cli.app._build_services")
    @patch("couture.cli.app.questionary")
    @patch("couture.cli.app.create_bill_menu")
    def test_new_bill(self, mock_create, mock_q, mock_build):
        from couture.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.side_effect = ["New Bill", "Exit"]

        main_menu()
        mock_create.assert_called_once_with(mock_build.return_value)

    @patch("couture.cli.app._build_services")
    @patch("couture.cli.app.questionary")
    def test_unrecognized_choice_loops(self, mock_q, mock_build):
        from couture.cli.app import main_menu

        mock_build.return_value = MagicMock()
        mock_q.select.return_value.ask.side_effect = ["Unknown Option", "Exit"]

        main_menu()
        assert mock_q.select.return_value.ask.call_count == 2
