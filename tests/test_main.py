from unittest.mock import patch


class TestMain:
    @patch("couture.__main__.close_connection")
    @patch("couture.__main__.main_menu")
    @patch("couture.__main__.reconfigure")
    @patch("couture.__main__.initialize_db")
    @patch("couture.__main__.configure_logging")
    def test_runs_startup_in_order(self, mock_configure, mock_init, mock_reconfigure, mock_menu, mock_close):
        from couture.__main__ import main

        main()
        mock_configure.assert_called_once()
        mock_init.assert_called_once()
        mock_reconfigure.assert_called_once()
        mock_menu.assert_called_once()
        mock_close.assert_called_once()

    @patch("couture.__main__.close_connection")
    @patch("couture.__main__.main_menu", side_effect=KeyboardInterrupt)
    @patch("couture.__main__.reconfigure")
    @patch("couture.__main__.initialize_db")
    @patch("couture.__main__.configure_logging")
    def test_closes_connection_on_interrupt(self, mock_configure, mock_init, mock_reconfigure, mock_menu, mock_close):
        import pytest

        from couture.__main__ import main

        with pytest.raises(KeyboardInterrupt):
            main()
        mock_close.assert_called_once()
